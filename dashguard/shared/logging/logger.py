# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Loguru setup shared by the web app and the maintenance scripts."""

from __future__ import annotations

import logging
import os
import secrets
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger

from .sensitive_filter import sanitize_record

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_FILE_FORMAT = "{time:YYYY-MM-DDTHH:mm:ss.SSSZ} {level} [{extra[request_id]}] {name}:{line} {message}"

DEFAULT_LOG_FILE = Path("instance") / "dashguard.log"

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


def _stamp_request_id(record) -> None:
    record["extra"].setdefault("request_id", _REQUEST_ID.get())


# Every record gets the id, including ones logged before setup_logging().
logger.configure(patcher=_stamp_request_id)


class _InterceptHandler(logging.Handler):
    """Routes stdlib logging (werkzeug, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def new_correlation_id() -> str:
    return secrets.token_urlsafe(8)


def set_correlation_id(value: str | None) -> None:
    _REQUEST_ID.set(value or "-")


def get_correlation_id() -> str:
    return _REQUEST_ID.get()


def clear_correlation_id() -> None:
    _REQUEST_ID.set("-")


def setup_logging(level: str | None = None, *, log_file: str | Path | None = None) -> None:
    """Install the console and rotating file sinks; safe to call more than once."""

    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    path = Path(log_file or os.getenv("LOG_FILE") or DEFAULT_LOG_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=_CONSOLE_FORMAT,
        filter=sanitize_record,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    logger.add(
        path,
        level=level,
        format=_FILE_FORMAT,
        filter=sanitize_record,
        rotation="10 MB",
        retention=5,
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "new_correlation_id",
    "set_correlation_id",
    "setup_logging",
]

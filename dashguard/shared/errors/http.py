# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from dashguard.shared.logging import logger

from .base import INTERNAL_ERROR_MESSAGE, AppError, StorageError


def error_response(error: AppError) -> tuple[Response, int]:
    return jsonify(error.to_dict()), int(error.status)


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if isinstance(exc, StorageError):
            logger.error(f"{exc.code} on {where}: {exc.detail}")
        elif exc.is_server_error:
            logger.opt(exception=exc).error(f"{exc.code} on {where}")
        else:
            logger.info(f"{exc.code} ({int(exc.status)}) on {where}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        message = (
            f"unhandled {type(exc).__name__} on {request.method} {request.path} "
            f"user={g.get('user_id')}"
        )
        if debug_mode:
            message += f" args={dict(request.args)}"
        logger.opt(exception=exc).error(message)
        return jsonify({"error": INTERNAL_ERROR_MESSAGE}), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["error_response", "register_error_handler"]

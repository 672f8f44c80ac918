# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time

from flask import Flask, Response, g, request

from dashguard.shared.logging import (clear_correlation_id, get_correlation_id,
                                      logger, new_correlation_id,
                                      set_correlation_id)

REQUEST_ID_HEADER = "X-Request-ID"
# Longer inbound ids are replaced rather than trusted.
MAX_REQUEST_ID_LENGTH = 64


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _inbound_request_id() -> str:
    value = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if value and len(value) <= MAX_REQUEST_ID_LENGTH and value.isprintable():
        return value
    return new_correlation_id()


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _start() -> None:
        set_correlation_id(_inbound_request_id())
        g.request_started = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"-> {request.method} {request.path} from {_client_ip()} "
                f"args={sorted(request.args)} cookies={sorted(request.cookies)}"
            )

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={g.get('user_id')}"
        )
        response.headers[REQUEST_ID_HEADER] = get_correlation_id()
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request failed: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]

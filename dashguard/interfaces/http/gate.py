# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flask binding of the access gate: resolves the session cookie on every request."""

from __future__ import annotations

import random
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from flask import Flask, g, jsonify, redirect, request

from dashguard.application.services.auth_gate import AuthGate, GateAction
from dashguard.application.services.session_store import SessionStore
from dashguard.domain.users.entities import Identity
from dashguard.domain.users.exceptions import UnauthorizedError
from dashguard.shared.logging import logger

# CORS preflights carry no cookies.
UNGATED_METHODS: tuple[str, ...] = ("OPTIONS",)


def current_identity() -> Identity | None:
    return getattr(g, "user", None)


def configure_auth_gate(
    app: Flask,
    *,
    gate: AuthGate,
    sessions: SessionStore,
    cookie_name: str,
    sweep_probability: float = 0.0,
) -> None:
    @app.before_request
    def _gate():
        g.user = None
        g.user_id = None
        if request.method in UNGATED_METHODS:
            return None

        identity = sessions.validate_session(request.cookies.get(cookie_name))
        g.user = identity
        g.user_id = identity.id if identity else None

        if sweep_probability and random.random() < sweep_probability:
            sessions.sweep_expired()

        decision = gate.decide(identity, request.path)
        if decision.action is GateAction.UNAUTHORIZED:
            logger.info(f"gate: 401 {request.method} {request.path}")
            return jsonify({"error": UnauthorizedError.default_message}), HTTPStatus.UNAUTHORIZED
        if decision.action is GateAction.REDIRECT:
            logger.debug(f"gate: redirect {request.path} -> {decision.location}")
            return redirect(decision.location, code=HTTPStatus.SEE_OTHER)
        return None


def login_required(func: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if current_identity() is None:
            logger.warning(f"Auth missing on {request.method} {request.path}")
            raise UnauthorizedError()
        return func(*args, **kwargs)

    return wrapper


__all__ = ["configure_auth_gate", "current_identity", "login_required"]

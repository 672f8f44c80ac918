# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from dashguard.application.use_cases.users.login_user import LoginUserUseCase
from dashguard.application.use_cases.users.logout_user import LogoutUserUseCase
from dashguard.interfaces.http.dto.auth import (AuthSuccessDTO, LoginRequestDTO,
                                                LoginSuccessDTO)
from dashguard.shared.config import SecurityConfig, SessionConfig
from dashguard.shared.errors.validation import raise_validation_error
from dashguard.shared.logging import logger

CREDENTIALS_REQUIRED_MESSAGE = "Username and password are required"


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        session_config: SessionConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._session_config = session_config
        self._security_config = security_config

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc, CREDENTIALS_REQUIRED_MESSAGE)

        result = self._login_use_case.execute(dto.username, dto.password, _get_client_ip())

        payload = LoginSuccessDTO(username=result.identity.username).model_dump()
        response = jsonify(payload)
        response.set_cookie(
            self._session_config.cookie_name,
            result.session.token,
            max_age=self._session_config.ttl_seconds,
            path="/",
            httponly=True,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
        )
        logger.info(f"auth.login: ok user_id={result.identity.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        token = request.cookies.get(self._session_config.cookie_name, "")
        self._logout_use_case.execute(token)

        response = jsonify(AuthSuccessDTO().model_dump())
        response.delete_cookie(
            self._session_config.cookie_name,
            path="/",
            httponly=True,
            samesite=self._security_config.cookie_samesite,
            secure=self._security_config.cookie_secure,
        )
        logger.info("auth.logout: ok")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp

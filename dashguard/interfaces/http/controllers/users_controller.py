# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from dashguard.application.services.credential_store import CredentialStore
from dashguard.interfaces.http.dto.auth import AuthSuccessDTO
from dashguard.interfaces.http.dto.users import (ChangePasswordRequestDTO,
                                                 CreateUserRequestDTO,
                                                 UserInfoDTO, UsersListDTO)
from dashguard.interfaces.http.gate import current_identity, login_required
from dashguard.shared.errors import ValidationError
from dashguard.shared.errors.validation import raise_validation_error
from dashguard.shared.logging import logger


def _success() -> tuple[Response, int]:
    return jsonify(AuthSuccessDTO().model_dump()), 200


def _parse_user_id(raw: str | None) -> int:
    try:
        user_id = int(raw or "")
    except ValueError:
        raise ValidationError("User ID is required") from None
    if user_id < 1:
        raise ValidationError("User ID is required")
    return user_id


class UsersController:
    def __init__(self, *, credentials: CredentialStore) -> None:
        self._credentials = credentials

    @login_required
    def list_users(self) -> tuple[Response, int]:
        users = [UserInfoDTO.model_validate(summary) for summary in self._credentials.list_users()]
        return jsonify(UsersListDTO(users=users).model_dump(mode="json")), 200

    @login_required
    def create_user(self) -> tuple[Response, int]:
        try:
            dto = CreateUserRequestDTO.model_validate(request.get_json(silent=True) or {})
        except PydanticValidationError as exc:
            raise_validation_error(exc, "Username and password are required")

        user_id = self._credentials.create_user(dto.username, dto.password)
        logger.info(f"users.create: ok user_id={user_id} by={current_identity().id}")
        return _success()

    @login_required
    def change_password(self) -> tuple[Response, int]:
        try:
            dto = ChangePasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except PydanticValidationError as exc:
            raise_validation_error(exc, "User ID and new password are required")

        self._credentials.update_password(dto.user_id, dto.new_password)
        logger.info(f"users.password: ok user_id={dto.user_id} by={current_identity().id}")
        return _success()

    @login_required
    def delete_user(self) -> tuple[Response, int]:
        user_id = _parse_user_id(request.args.get("userId"))

        self._credentials.delete_user(user_id)
        logger.info(f"users.delete: ok user_id={user_id} by={current_identity().id}")
        return _success()

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/users", view_func=self.list_users, methods=["GET"])
        bp.add_url_rule("/users", view_func=self.create_user, methods=["POST"])
        bp.add_url_rule("/users", view_func=self.change_password, methods=["PUT"])
        bp.add_url_rule("/users", view_func=self.delete_user, methods=["DELETE"])
        return bp

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from dashguard.shared.errors.base import DomainError, ValidationError

GENERIC_CREDENTIALS_MESSAGE = "Invalid username or password"


class AuthenticationError(DomainError):
    default_code = "invalid_credentials"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = GENERIC_CREDENTIALS_MESSAGE


class UnauthorizedError(DomainError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Unauthorized"


class ConflictError(DomainError):
    default_code = "conflict"
    default_status = HTTPStatus.CONFLICT
    default_message = "Conflict"


class UserAlreadyExistsError(ConflictError):
    default_code = "user_already_exists"
    default_message = "Username already exists"


class LastUserError(ConflictError):
    # Reported as 400 to match the user administration contract.
    default_code = "last_user"
    default_status = HTTPStatus.BAD_REQUEST
    default_message = "Cannot delete the last user"


class NotFoundError(DomainError):
    default_code = "not_found"
    default_status = HTTPStatus.NOT_FOUND
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"
    default_message = "User not found"


__all__ = [
    "GENERIC_CREDENTIALS_MESSAGE",
    "AuthenticationError",
    "ConflictError",
    "LastUserError",
    "NotFoundError",
    "UnauthorizedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "ValidationError",
]

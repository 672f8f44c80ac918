# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users.entities import Identity, SessionToken, User, UserSummary
from .users.exceptions import (
    AuthenticationError,
    ConflictError,
    LastUserError,
    NotFoundError,
    UnauthorizedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "Identity",
    "SessionToken",
    "User",
    "UserSummary",
    "AuthenticationError",
    "ConflictError",
    "LastUserError",
    "NotFoundError",
    "UnauthorizedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]

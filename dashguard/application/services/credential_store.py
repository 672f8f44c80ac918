# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""User accounts and the password verification contract."""

from __future__ import annotations

from collections.abc import Sequence

from dashguard.application.services.session_store import SessionStore
from dashguard.domain.users.entities import Identity, UserSummary
from dashguard.domain.users.exceptions import (
    UserAlreadyExistsError,
    UserNotFoundError,
)
from dashguard.domain.users.repositories import PasswordHasher, UserRepository
from dashguard.shared.errors.base import ValidationError
from dashguard.shared.logging import logger

USERNAME_MIN_LEN = 3
PASSWORD_MIN_LEN = 4

# Used to burn the same KDF time for unknown usernames.
_UNKNOWN_USER_SALT = "0" * 32


def _validate_username(username: str) -> None:
    if not isinstance(username, str) or len(username) < USERNAME_MIN_LEN:
        raise ValidationError(
            f"Username must be at least {USERNAME_MIN_LEN} characters",
            context={"field": "username", "min_length": USERNAME_MIN_LEN},
        )


def _validate_password(password: str) -> None:
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LEN:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LEN} characters",
            context={"field": "password", "min_length": PASSWORD_MIN_LEN},
        )


class CredentialStore:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def bootstrap_if_empty(self, username: str, password: str) -> Identity | None:
        """Create the first account when the store has none; returns it if created."""

        if self._users.count() > 0:
            return None
        try:
            user_id = self.create_user(username, password)
        except UserAlreadyExistsError:
            # Another process seeded the same account between count() and add().
            logger.info(f"bootstrap: {username!r} created concurrently, skipping")
            return None
        return Identity(id=user_id, username=username)

    def create_user(self, username: str, password: str) -> int:
        _validate_username(username)
        _validate_password(password)

        if self._users.find_by_username(username) is not None:
            raise UserAlreadyExistsError()

        salt = self._password_hasher.generate_salt()
        hashed = self._password_hasher.hash(password, salt)
        user = self._users.add(username, hashed, salt)
        return user.id

    def verify_credentials(self, username: str, password: str) -> Identity | None:
        """Return the identity for a matching pair, else None.

        Unknown usernames and wrong passwords give the same result and cost
        the same key derivation.
        """

        user = self._users.find_by_username(username)
        if user is None:
            self._password_hasher.hash(password, _UNKNOWN_USER_SALT)
            return None
        if not self._password_hasher.verify(password, user.salt, user.password_hash):
            return None
        return user.identity()

    def update_password(self, user_id: int, new_password: str) -> None:
        _validate_password(new_password)

        salt = self._password_hasher.generate_salt()
        hashed = self._password_hasher.hash(new_password, salt)
        if not self._users.update_credentials(user_id, hashed, salt):
            raise UserNotFoundError(context={"user_id": user_id})

        self._sessions.delete_all_sessions_for_user(user_id)
        logger.info(f"users.update_password: ok user_id={user_id}")

    def delete_user(self, user_id: int) -> None:
        self._users.delete_unless_last(user_id)
        self._sessions.delete_all_sessions_for_user(user_id)
        logger.info(f"users.delete: ok user_id={user_id}")

    def list_users(self) -> Sequence[UserSummary]:
        return self._users.list_summaries()


__all__ = ["CredentialStore", "PASSWORD_MIN_LEN", "USERNAME_MIN_LEN"]

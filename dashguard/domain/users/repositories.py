# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .entities import Identity, SessionToken, User, UserSummary


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, username: str, password_hash: str, salt: str) -> User: ...
    def update_credentials(self, user_id: int, password_hash: str, salt: str) -> bool: ...

    def delete_unless_last(self, user_id: int) -> None:
        """Remove the user and its sessions atomically.

        Raises UserNotFoundError for an unknown id and LastUserError when it is
        the only remaining user.
        """

    def count(self) -> int: ...
    def list_summaries(self) -> Sequence[UserSummary]: ...


class SessionTokenRepository(Protocol):
    def add(self, token: SessionToken) -> None: ...
    def find_identity(self, token: str, now: datetime) -> Identity | None: ...
    def revoke(self, token: str) -> None: ...
    def revoke_all_for_user(self, user_id: int) -> int: ...
    def delete_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def generate_salt(self) -> str: ...
    def hash(self, password: str, salt: str) -> str: ...
    def verify(self, password: str, salt: str, hashed: str) -> bool: ...

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Identity:
    """Who a request belongs to; the only user data handed to the HTTP layer."""

    id: int
    username: str


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    salt: str
    created_at: datetime

    def identity(self) -> Identity:
        return Identity(id=self.id, username=self.username)


@dataclass(slots=True, frozen=True)
class UserSummary:

    id: int
    username: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class SessionToken:

    token: str
    user_id: int
    expires_at: datetime

    def is_valid_at(self, now: datetime) -> bool:
        return self.expires_at > now

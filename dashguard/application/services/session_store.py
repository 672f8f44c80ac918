# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer session tokens and their fixed expiry."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from dashguard.domain.users.entities import Identity, SessionToken
from dashguard.domain.users.repositories import SessionTokenRepository
from dashguard.shared.logging import logger

TOKEN_BYTES = 32
# Anything longer cannot have been issued here; skip the lookup.
MAX_TOKEN_LENGTH = 256
DEFAULT_SESSION_TTL = timedelta(days=7)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class SessionStore:
    def __init__(
        self,
        *,
        tokens: SessionTokenRepository,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self._tokens = tokens
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def create_session(self, user_id: int) -> SessionToken:
        """Issue a new token for ``user_id``; other sessions of the user stay valid."""

        token = SessionToken(
            token=secrets.token_hex(TOKEN_BYTES),
            user_id=user_id,
            expires_at=self._clock() + self._ttl,
        )
        self._tokens.add(token)
        logger.info(
            f"session.create: user={user_id} exp={token.expires_at.isoformat()} tok={token.token[:8]}…"
        )
        return token

    def validate_session(self, token: str | None) -> Identity | None:
        """Resolve ``token`` to its owner, or None when missing, unknown or expired.

        Expired rows are left in place; reclaiming them is sweep_expired's job.
        """

        if not token or len(token) > MAX_TOKEN_LENGTH:
            return None
        return self._tokens.find_identity(token, self._clock())

    def delete_session(self, token: str | None) -> None:
        if not token:
            return
        self._tokens.revoke(token)
        logger.info(f"session.delete: tok={token[:8]}…")

    def delete_all_sessions_for_user(self, user_id: int) -> int:
        removed = self._tokens.revoke_all_for_user(user_id)
        logger.info(f"session.revoke_all: user={user_id} removed={removed}")
        return removed

    def sweep_expired(self) -> int:
        removed = self._tokens.delete_expired(self._clock())
        if removed:
            logger.info(f"session.sweep: removed {removed} expired sessions")
        else:
            logger.debug("session.sweep: nothing to remove")
        return removed


__all__ = ["DEFAULT_SESSION_TTL", "SessionStore", "utc_now"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from dashguard.application.services.credential_store import CredentialStore
from dashguard.application.services.session_store import SessionStore
from dashguard.domain.users.entities import Identity, SessionToken
from dashguard.domain.users.exceptions import AuthenticationError
from dashguard.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    identity: Identity
    session: SessionToken


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionStore,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions

    def execute(self, username: str, password: str, ip_address: str | None = None) -> LoginResult:
        identity = self._credentials.verify_credentials(username, password)

        if identity is None:
            logger.warning(f"auth.login: rejected username={username!r} ip={ip_address}")
            raise AuthenticationError()

        session = self._sessions.create_session(identity.id)
        return LoginResult(identity=identity, session=session)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from dashguard.application.services.auth_gate import AuthGate
from dashguard.application.services.credential_store import CredentialStore
from dashguard.application.services.password_hashing import Pbkdf2PasswordHasher
from dashguard.application.services.session_store import SessionStore
from dashguard.application.use_cases.users.login_user import LoginUserUseCase
from dashguard.application.use_cases.users.logout_user import LogoutUserUseCase
from dashguard.infrastructure.bootstrap import Bootstrap
from dashguard.infrastructure.db.session import Database
from dashguard.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from dashguard.interfaces.http.controllers.auth_controller import AuthController
from dashguard.interfaces.http.controllers.pages_controller import PagesController
from dashguard.interfaces.http.controllers.users_controller import UsersController
from dashguard.shared.config import AppConfig


class Container:
    def __init__(self, *, config: AppConfig, database: Database) -> None:
        self.config = config
        self.database = database

    @cached_property
    def password_hasher(self) -> Pbkdf2PasswordHasher:
        return Pbkdf2PasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(self.database)

    @cached_property
    def session_store(self) -> SessionStore:
        return SessionStore(
            tokens=self.session_token_repository,
            ttl=timedelta(days=self.config.session.ttl_days),
        )

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def auth_gate(self) -> AuthGate:
        return AuthGate.from_config(self.config.gate)

    @cached_property
    def bootstrap(self) -> Bootstrap:
        return Bootstrap(
            database=self.database,
            credentials=self.credential_store,
            config=self.config.bootstrap,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            credentials=self.credential_store,
            sessions=self.session_store,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            session_config=self.config.session,
            security_config=self.config.security,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(credentials=self.credential_store)

    @cached_property
    def pages_controller(self) -> PagesController:
        return PagesController(
            login_path=self.config.gate.login_path,
            home_path=self.config.gate.home_path,
        )

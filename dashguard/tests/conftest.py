from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from dashguard.app import EXTENSION_KEY, create_app
from dashguard.application.services.credential_store import CredentialStore
from dashguard.application.services.session_store import SessionStore
from dashguard.domain.users.entities import Identity, SessionToken, User, UserSummary
from dashguard.domain.users.exceptions import (LastUserError,
                                               UserAlreadyExistsError,
                                               UserNotFoundError)
from dashguard.domain.users.repositories import (PasswordHasher,
                                                 SessionTokenRepository,
                                                 UserRepository)
from dashguard.infrastructure.container import Container
from dashguard.shared.config import AppConfig, DatabaseConfig


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, username: str, password_hash: str, salt: str) -> User:
        if self.find_by_username(username) is not None:
            raise UserAlreadyExistsError()
        user = User(
            id=self._seq,
            username=username,
            password_hash=password_hash,
            salt=salt,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self._users[user.id] = user
        return user

    def update_credentials(self, user_id: int, password_hash: str, salt: str) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        self._users[user_id] = User(
            id=user.id,
            username=user.username,
            password_hash=password_hash,
            salt=salt,
            created_at=user.created_at,
        )
        return True

    def delete_unless_last(self, user_id: int) -> None:
        if user_id not in self._users:
            raise UserNotFoundError(context={"user_id": user_id})
        if len(self._users) <= 1:
            raise LastUserError()
        del self._users[user_id]

    def count(self) -> int:
        return len(self._users)

    def list_summaries(self) -> list[UserSummary]:
        return [
            UserSummary(id=u.id, username=u.username, created_at=u.created_at)
            for u in self._users.values()
        ]


class InMemorySessionTokenRepository(SessionTokenRepository):
    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users
        self.tokens: dict[str, SessionToken] = {}

    def add(self, token: SessionToken) -> None:
        self.tokens[token.token] = token

    def find_identity(self, token: str, now: datetime) -> Identity | None:
        found = self.tokens.get(token)
        if found is None or not found.is_valid_at(now):
            return None
        user = self._users.find_by_id(found.user_id)
        return user.identity() if user else None

    def revoke(self, token: str) -> None:
        self.tokens.pop(token, None)

    def revoke_all_for_user(self, user_id: int) -> int:
        doomed = [t for t, s in self.tokens.items() if s.user_id == user_id]
        for t in doomed:
            del self.tokens[t]
        return len(doomed)

    def delete_expired(self, now: datetime) -> int:
        doomed = [t for t, s in self.tokens.items() if not s.is_valid_at(now)]
        for t in doomed:
            del self.tokens[t]
        return len(doomed)


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.hashed: list[tuple[str, str]] = []
        self._seq = 0

    def generate_salt(self) -> str:
        self._seq += 1
        return f"salt-{self._seq}"

    def hash(self, password: str, salt: str) -> str:
        self.hashed.append((password, salt))
        return f"hashed:{salt}:{password}"

    def verify(self, password: str, salt: str, hashed: str) -> bool:
        return self.hash(password, salt) == hashed


@dataclass
class FakeClock:
    now: datetime = field(default_factory=lambda: datetime(2025, 1, 1, 12, 0, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class Stores:
    users: InMemoryUserRepository
    tokens: InMemorySessionTokenRepository
    hasher: DeterministicHasher
    clock: FakeClock
    sessions: SessionStore
    credentials: CredentialStore


@pytest.fixture()
def stores() -> Stores:
    users = InMemoryUserRepository()
    tokens = InMemorySessionTokenRepository(users)
    hasher = DeterministicHasher()
    clock = FakeClock()
    sessions = SessionStore(tokens=tokens, clock=clock)
    credentials = CredentialStore(users=users, sessions=sessions, password_hasher=hasher)
    return Stores(users, tokens, hasher, clock, sessions, credentials)


@pytest.fixture(autouse=True)
def log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "logs" / "app.log"
    monkeypatch.setenv("LOG_FILE", str(path))
    return path


@pytest.fixture()
def database_config(tmp_path: Path) -> DatabaseConfig:
    return DatabaseConfig(url=f"sqlite:///{tmp_path / 'dashguard.db'}")


@pytest.fixture()
def app_config(database_config: DatabaseConfig) -> AppConfig:
    return AppConfig(app_env="test", secret_key="test", database=database_config)


@pytest.fixture()
def app(app_config: AppConfig) -> Iterator[Flask]:
    app = create_app(app_config)
    yield app
    app.extensions[EXTENSION_KEY].database.close()


@pytest.fixture()
def container(app: Flask) -> Container:
    return app.extensions[EXTENSION_KEY]


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def signed_in(client: FlaskClient) -> FlaskClient:
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin"})
    assert response.status_code == 200
    return client

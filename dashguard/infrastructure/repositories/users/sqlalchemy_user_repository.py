# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from dashguard.domain.users.entities import Identity
from dashguard.domain.users.entities import SessionToken as DomainSessionToken
from dashguard.domain.users.entities import User as DomainUser
from dashguard.domain.users.entities import UserSummary
from dashguard.domain.users.exceptions import (LastUserError,
                                               UserAlreadyExistsError,
                                               UserNotFoundError)
from dashguard.domain.users.repositories import SessionTokenRepository, UserRepository
from dashguard.infrastructure.db.models import Session, User, as_utc
from dashguard.infrastructure.db.session import Database


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        salt=row.salt,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def find_by_username(self, username: str) -> DomainUser | None:
        with self._database.session_scope() as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._database.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, username: str, password_hash: str, salt: str) -> DomainUser:
        try:
            with self._database.session_scope() as session:
                row = User(username=username, password_hash=password_hash, salt=salt)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc

    def update_credentials(self, user_id: int, password_hash: str, salt: str) -> bool:
        with self._database.session_scope() as session:
            result = session.execute(
                update(User)
                .where(User.id == user_id)
                .values(password_hash=password_hash, salt=salt)
            )
            return result.rowcount > 0

    def delete_unless_last(self, user_id: int) -> None:
        with self._database.session_scope(exclusive=True) as session:
            if session.get(User, user_id) is None:
                raise UserNotFoundError(context={"user_id": user_id})
            if session.scalar(select(func.count()).select_from(User)) <= 1:
                raise LastUserError()
            session.execute(delete(Session).where(Session.user_id == user_id))
            session.execute(delete(User).where(User.id == user_id))

    def count(self) -> int:
        with self._database.session_scope() as session:
            return int(session.scalar(select(func.count()).select_from(User)) or 0)

    def list_summaries(self) -> Sequence[UserSummary]:
        with self._database.session_scope() as session:
            rows = session.execute(
                select(User.id, User.username, User.created_at).order_by(
                    User.created_at.asc(), User.id.asc()
                )
            ).all()
        return [
            UserSummary(id=row.id, username=row.username, created_at=as_utc(row.created_at))
            for row in rows
        ]


class SqlAlchemySessionTokenRepository(SessionTokenRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def add(self, token: DomainSessionToken) -> None:
        with self._database.session_scope() as session:
            session.add(
                Session(
                    token=token.token,
                    user_id=token.user_id,
                    expires_at=as_utc(token.expires_at),
                )
            )

    def find_identity(self, token: str, now: datetime) -> Identity | None:
        with self._database.session_scope() as session:
            row = session.execute(
                select(User.id, User.username)
                .join(Session, Session.user_id == User.id)
                .where(Session.token == token, Session.expires_at > as_utc(now))
            ).first()
            if row is None:
                return None
            return Identity(id=row.id, username=row.username)

    def revoke(self, token: str) -> None:
        with self._database.session_scope() as session:
            session.execute(delete(Session).where(Session.token == token))

    def revoke_all_for_user(self, user_id: int) -> int:
        with self._database.session_scope() as session:
            result = session.execute(delete(Session).where(Session.user_id == user_id))
            return result.rowcount

    def delete_expired(self, now: datetime) -> int:
        with self._database.session_scope() as session:
            result = session.execute(delete(Session).where(Session.expires_at <= as_utc(now)))
            return result.rowcount

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database handle with an explicit open/close lifecycle."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from dashguard.shared.config import DatabaseConfig
from dashguard.shared.errors import StorageError
from dashguard.shared.logging import logger


class Base(DeclarativeBase):
    pass


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _ensure_sqlite_directory(url: str) -> None:
    database = make_url(url).database
    if not database or database == ":memory:":
        return
    Path(database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


# Session option asking for a transaction that holds the write lock from the start.
WRITE_LOCK = {"sqlite_begin": "IMMEDIATE"}


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    # Transactions are begun by _begin_sqlite, not by the driver.
    dbapi_conn.isolation_level = None
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


def _begin_sqlite(conn) -> None:
    mode = conn.get_execution_options().get("sqlite_begin", "DEFERRED")
    conn.exec_driver_sql(f"BEGIN {mode}")


class Database:
    def __init__(self, config: DatabaseConfig) -> None:
        self._config = config
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageError("database accessed before open()")
        return self._engine

    def open(self) -> Database:
        if self._engine is not None:
            return self

        url = self._config.url
        connect_args: dict[str, object] = {}
        if _is_sqlite(url):
            _ensure_sqlite_directory(url)
            connect_args = {
                "check_same_thread": False,
                "timeout": int(self._config.pool_timeout),
            }

        pool_args: dict[str, object] = {
            "pool_size": self._config.pool_size,
            "max_overflow": self._config.max_overflow,
            "pool_timeout": self._config.pool_timeout,
        }
        if make_url(url).database in (None, "", ":memory:") and _is_sqlite(url):
            # In-memory SQLite runs on a singleton pool without overflow settings.
            pool_args = {}

        engine = create_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            connect_args=connect_args,
            **pool_args,
        )
        if _is_sqlite(url):
            event.listen(engine, "connect", _set_sqlite_pragmas)
            event.listen(engine, "begin", _begin_sqlite)

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )
        logger.info(f"db: opened {engine.url.render_as_string(hide_password=True)}")
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("db: closed")

    def __enter__(self) -> Database:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def session_scope(self, *, exclusive: bool = False) -> Iterator[Session]:
        """Commit on success, roll back on error.

        ``exclusive`` takes the SQLite write lock before the first read, so a
        check and the write that depends on it cannot interleave with another
        writer.
        """

        if self._session_factory is None:
            raise StorageError("database accessed before open()")
        session = self._session_factory()
        try:
            if exclusive:
                session.connection(execution_options=WRITE_LOCK)
            yield session
            session.commit()
        except IntegrityError:
            session.rollback()
            raise
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(f"{type(exc).__name__}: {exc}") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self) -> None:
        # Importing the models registers the tables on Base.metadata.
        from dashguard.infrastructure.db import models  # noqa: F401

        with self.engine.connect() as conn:
            conn.execution_options(**WRITE_LOCK)
            with conn.begin():
                Base.metadata.create_all(bind=conn)
        logger.info("Database schema ensured")

    def drop_schema(self) -> None:
        from dashguard.infrastructure.db import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)


__all__ = ["Base", "Database"]

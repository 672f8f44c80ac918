# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Delete expired session rows; meant for cron or a systemd timer."""

from __future__ import annotations

import argparse

from dashguard.application.services.session_store import SessionStore
from dashguard.infrastructure.db import Database
from dashguard.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemySessionTokenRepository
from dashguard.shared.config import DatabaseConfig, load_config
from dashguard.shared.logging import logger, setup_logging


def sweep(config: DatabaseConfig) -> int:
    with Database(config) as database:
        database.create_schema()
        store = SessionStore(tokens=SqlAlchemySessionTokenRepository(database))
        return store.sweep_expired()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Remove expired login sessions")
    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy URL of the credential database (defaults to DATABASE_URL)",
    )
    args = parser.parse_args(argv)

    app_config = load_config()
    setup_logging(app_config.log_level)
    db_config = app_config.database
    if args.database_url:
        db_config = DatabaseConfig(url=args.database_url)

    removed = sweep(db_config)
    logger.info(f"sessions.sweep: removed={removed}")
    print(f"Removed {removed} expired session(s)")


if __name__ == "__main__":
    main()

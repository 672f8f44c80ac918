# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dashguard.application.services.credential_store import CredentialStore
from dashguard.domain.users.entities import Identity
from dashguard.infrastructure.db.session import Database
from dashguard.shared.config import BootstrapConfig
from dashguard.shared.logging import logger


class BootstrapError(Exception):
    pass


class Bootstrap:
    """One-shot start-up step: ensure the schema and seed the first account."""

    def __init__(
        self,
        *,
        database: Database,
        credentials: CredentialStore,
        config: BootstrapConfig,
    ) -> None:
        self._database = database
        self._credentials = credentials
        self._config = config

    def run(self) -> Identity | None:
        try:
            self._database.create_schema()
            created = self._credentials.bootstrap_if_empty(
                self._config.username, self._config.password
            )
        except Exception as e:
            logger.error(f"bootstrap: failed: {e}")
            raise BootstrapError(f"Failed to bootstrap credential store: {e}") from e

        if created is None:
            logger.info("bootstrap: users present, default account not needed")
            return None

        logger.warning(
            f"bootstrap: created default user '{created.username}' "
            f"with initial password '{self._config.password}'; change it now"
        )
        return created


__all__ = ["Bootstrap", "BootstrapError"]

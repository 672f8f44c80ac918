# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request access decision, independent of any web framework."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from dashguard.domain.users.entities import Identity
from dashguard.shared.config import GateConfig


class GateAction(StrEnum):
    PROCEED = "proceed"
    UNAUTHORIZED = "unauthorized"
    REDIRECT = "redirect"


@dataclass(slots=True, frozen=True)
class GateDecision:
    action: GateAction
    location: str | None = None
    identity: Identity | None = None


def _strip_slash(path: str) -> str:
    return path.rstrip("/") or "/"


class AuthGate:
    def __init__(
        self,
        *,
        public_paths: Sequence[str],
        api_prefix: str,
        login_path: str,
        home_path: str,
    ) -> None:
        self._public_paths = tuple(_strip_slash(p) for p in public_paths)
        self._api_prefix = api_prefix
        self._login_path = login_path
        self._home_path = home_path

    @classmethod
    def from_config(cls, config: GateConfig) -> AuthGate:
        return cls(
            public_paths=config.public_paths,
            api_prefix=config.api_prefix,
            login_path=config.login_path,
            home_path=config.home_path,
        )

    def is_public(self, path: str) -> bool:
        for public in self._public_paths:
            if path == public:
                return True
            if public != "/" and path.startswith(public + "/"):
                return True
        return False

    def is_api(self, path: str) -> bool:
        return path.startswith(self._api_prefix)

    def decide(self, identity: Identity | None, path: str) -> GateDecision:
        # The login page is public, so the signed-in case must be checked first.
        if identity is not None and _strip_slash(path) == _strip_slash(self._login_path):
            return GateDecision(GateAction.REDIRECT, location=self._home_path)
        if self.is_public(path):
            return GateDecision(GateAction.PROCEED, identity=identity)
        if identity is None:
            if self.is_api(path):
                return GateDecision(GateAction.UNAUTHORIZED)
            return GateDecision(GateAction.REDIRECT, location=self._login_path)
        return GateDecision(GateAction.PROCEED, identity=identity)


__all__ = ["AuthGate", "GateAction", "GateDecision"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from dashguard.domain.users.repositories import PasswordHasher

PBKDF2_DIGEST = "sha512"
PBKDF2_ITERATIONS = 10_000
PBKDF2_KEY_LENGTH = 64
SALT_BYTES = 16


class Pbkdf2PasswordHasher(PasswordHasher):
    """PBKDF2-HMAC-SHA512 over a per-user hex salt, stored as 128 hex chars.

    The salt is fed to the KDF as its hex text, not the decoded bytes; stored
    hashes depend on this.
    """

    def __init__(
        self,
        *,
        iterations: int = PBKDF2_ITERATIONS,
        key_length: int = PBKDF2_KEY_LENGTH,
    ) -> None:
        self._iterations = iterations
        self._key_length = key_length

    def generate_salt(self) -> str:
        return secrets.token_hex(SALT_BYTES)

    def hash(self, password: str, salt: str) -> str:
        derived = hashlib.pbkdf2_hmac(
            PBKDF2_DIGEST,
            password.encode("utf-8"),
            salt.encode("utf-8"),
            self._iterations,
            dklen=self._key_length,
        )
        return derived.hex()

    def verify(self, password: str, salt: str, hashed: str) -> bool:
        candidate = self.hash(password, salt)
        return hmac.compare_digest(candidate.encode("ascii"), hashed.encode("ascii", "replace"))

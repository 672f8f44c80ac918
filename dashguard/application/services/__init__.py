# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_gate import AuthGate, GateAction, GateDecision
from .credential_store import CredentialStore
from .password_hashing import Pbkdf2PasswordHasher
from .session_store import SessionStore

__all__ = [
    "AuthGate",
    "CredentialStore",
    "GateAction",
    "GateDecision",
    "Pbkdf2PasswordHasher",
    "SessionStore",
]

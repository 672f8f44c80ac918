# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    BootstrapConfig,
    DatabaseConfig,
    GateConfig,
    SecurityConfig,
    SessionConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "BootstrapConfig",
    "DatabaseConfig",
    "GateConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]

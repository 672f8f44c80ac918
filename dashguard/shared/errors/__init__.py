# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import AppError, DomainError, StorageError, ValidationError
from .http import error_response, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "StorageError",
    "ValidationError",
    "error_response",
    "register_error_handler",
]

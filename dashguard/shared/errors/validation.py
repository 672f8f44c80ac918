# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def invalid_fields(exc: PydanticValidationError) -> list[str]:
    """Dotted locations of the offending fields, without their values."""

    fields = {".".join(str(part) for part in error["loc"]) for error in exc.errors()}
    return sorted(field or "body" for field in fields)


def raise_validation_error(exc: PydanticValidationError, message: str) -> NoReturn:
    raise ValidationError(message, context={"fields": invalid_fields(exc)}) from exc


__all__ = ["invalid_fields", "raise_validation_error"]

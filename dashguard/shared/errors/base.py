# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(slots=True, eq=False)
class AppError(Exception):
    """An error whose message is safe to show to the client."""

    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.code
        Exception.__init__(self, self.message)

    @property
    def is_server_error(self) -> bool:
        return self.status >= HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Base for rule violations; subclasses pick their code, status and message."""

    default_code: ClassVar[str] = "domain_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    default_message: ClassVar[str] = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=self.default_code,
            status=self.default_status,
            message=message or self.default_message,
            context=context,
        )


class StorageError(AppError):
    """The database could not be used; ``detail`` is for logs only."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code="storage_error",
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
        )
        self.detail = detail


class ValidationError(DomainError):
    default_code = "validation_error"
    default_status = HTTPStatus.BAD_REQUEST
    default_message = "Invalid request"

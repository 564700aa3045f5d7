# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Exception base types.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorKind(str, Enum):
    """Closed taxonomy of API failures."""

    NETWORK = "network"
    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    SERVER = "server"
    UNKNOWN = "unknown"


class RecoveryAction(str, Enum):
    """Recovery action."""

    RETRY = "retry"
    FAIL_FAST = "fail_fast"


class ApiError(Exception):
    """Classified API failure; the only error type callers of the data layer see."""

    kind: ClassVar[ErrorKind] = ErrorKind.UNKNOWN
    default_message: ClassVar[str] = "An unexpected error occurred."

    def __init__(
        self,
        message: str | None = None,
        *,
        status: int = 0,
        field_errors: dict[str, list[str]] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status = status
        self.field_errors = field_errors
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Structured form for logs and UI payloads."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "status": self.status,
            "message": self.message,
        }
        if self.field_errors:
            data["field_errors"] = {k: list(v) for k, v in self.field_errors.items()}
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"

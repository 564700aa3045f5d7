from __future__ import annotations

import logging
from contextvars import ContextVar, Token
from typing import Any

_CONTEXT_FIELDS: tuple[str, ...] = (
    "session_id",
    "request_id",
    "resource_key",
    "method",
    "path",
)

_context_var: ContextVar[dict[str, Any] | None] = ContextVar(
    "dashboard_access_log_context",
    default=None,
)


def _select_context(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: fields.get(key) for key in _CONTEXT_FIELDS if key in fields}


def get_log_context() -> dict[str, Any]:
    current = _context_var.get()
    if not current:
        return {}
    return dict(current)


def set_log_context(**fields: Any) -> None:
    _context_var.set(_select_context(fields))


def clear_log_context() -> None:
    _context_var.set({})


class _ContextBinder:
    def __init__(self, token: Token) -> None:
        self._token = token

    def __enter__(self) -> _ContextBinder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _context_var.reset(self._token)


def bind_log_context(**fields: Any) -> _ContextBinder:
    current = get_log_context()
    merged = {**current, **_select_context(fields)}
    token = _context_var.set(merged)
    return _ContextBinder(token)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_log_context()
        for key in _CONTEXT_FIELDS:
            if not hasattr(record, key):
                setattr(record, key, ctx.get(key))

        if not hasattr(record, "event"):
            record.event = "log"

        if not hasattr(record, "error_type"):
            record.error_type = None
        if record.exc_info and record.error_type is None:
            record.error_type = record.exc_info[0].__name__

        return True

# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Error classifier.

Unifies transport failures into the ApiError taxonomy. The kind depends only
on whether a response was received and on its status code; message text is
never inspected.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx

from dashboard_access.exception.auth import AuthError
from dashboard_access.exception.base import ApiError
from dashboard_access.exception.network import NetworkError
from dashboard_access.exception.not_found import NotFoundError
from dashboard_access.exception.server import ServerError
from dashboard_access.exception.unknown import UnknownApiError
from dashboard_access.exception.validation_failed import ValidationFailedError

_TIMEOUT_CODES = {"ECONNABORTED", "ETIMEDOUT"}


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _extract_response(error: BaseException) -> Any | None:
    return getattr(error, "response", None)


def _extract_status_code(response: Any) -> int | None:
    status = _to_int(getattr(response, "status_code", None))
    if status is not None:
        return status
    return _to_int(getattr(response, "status", None))


def _normalize_payload(payload: Any) -> dict[str, Any] | None:
    if isinstance(payload, dict):
        return payload
    if isinstance(payload, (str, bytes)):
        try:
            parsed = json.loads(payload)
        except ValueError:
            return None
        return parsed if isinstance(parsed, dict) else None
    return None


def _extract_body(response: Any) -> dict[str, Any] | None:
    json_method = getattr(response, "json", None)
    if callable(json_method):
        try:
            return _normalize_payload(json_method())
        except (ValueError, httpx.StreamError):
            # Unread or closed streams have no usable body; status still decides.
            return None
    return _normalize_payload(getattr(response, "data", None))


def _extract_message(body: dict[str, Any] | None) -> str | None:
    if body is None:
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _extract_field_errors(body: dict[str, Any] | None) -> dict[str, list[str]] | None:
    if body is None:
        return None
    errors = body.get("errors")
    if not isinstance(errors, dict) or not errors:
        return None
    field_errors: dict[str, list[str]] = {}
    for field, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            field_errors[str(field)] = [str(m) for m in messages]
        elif messages is not None:
            field_errors[str(field)] = [str(messages)]
    return field_errors or None


def _is_timeout(error: BaseException) -> bool:
    if isinstance(error, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return True
    return getattr(error, "code", None) in _TIMEOUT_CODES


class ErrorClassifier:
    """Map raw failures to ApiError instances."""

    @classmethod
    def classify(cls, error: BaseException) -> ApiError:
        if isinstance(error, ApiError):
            return error

        response = _extract_response(error)
        if response is None:
            return NetworkError(is_timeout=_is_timeout(error), cause=error)

        status = _extract_status_code(response)
        body = _extract_body(response)
        message = _extract_message(body)

        if status == 400:
            return ValidationFailedError(
                message,
                status=status,
                field_errors=_extract_field_errors(body),
                cause=error,
            )
        if status in {401, 403}:
            return AuthError(message, status=status, cause=error)
        if status == 404:
            return NotFoundError(message, status=status, cause=error)
        if status is not None and status >= 500:
            return ServerError(message, status=status, cause=error)

        return UnknownApiError(message, status=status or 0, cause=error)


def classify(error: BaseException) -> ApiError:
    """Shortcut for ErrorClassifier.classify."""
    return ErrorClassifier.classify(error)

# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Response envelope handling.

The backend wraps JSON bodies as {success, data?, error?, message?}; simple
GETs may return the raw payload instead.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel

T = TypeVar("T")


class ApiEnvelope(BaseModel, Generic[T]):
    """Uniform response wrapper."""

    success: bool
    data: T | None = None
    error: Any = None
    message: Any = None


def is_envelope(payload: Any) -> bool:
    return isinstance(payload, dict) and isinstance(payload.get("success"), bool)


def unwrap_envelope(payload: Any, response: httpx.Response) -> Any:
    """
    Return the envelope's data, or the payload itself when it is not wrapped.

    A failure envelope raises httpx.HTTPStatusError for `response`, so it is
    classified by status like any other failed response.
    """
    if not is_envelope(payload):
        return payload

    envelope = ApiEnvelope[Any].model_validate(payload)
    if envelope.success:
        return envelope.data

    reason = envelope.error or envelope.message or "Request failed"
    raise httpx.HTTPStatusError(
        f"{reason} (status {response.status_code})",
        request=response.request,
        response=response,
    )

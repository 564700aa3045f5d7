# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""User-facing error messages."""

from __future__ import annotations

import re

from dashboard_access.exception.base import ApiError, ErrorKind

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def format_validation_errors(field_errors: dict[str, list[str]]) -> str:
    """
    Render per-field messages as one block.

    Example:
        >>> format_validation_errors({"firstName": ["is required"]})
        'Validation errors:\\nfirst Name: is required'
    """
    lines = []
    for field, messages in field_errors.items():
        field_name = _CAMEL_BOUNDARY.sub(r" \1", field).strip()
        lines.append(f"{field_name}: {', '.join(messages)}")
    return "Validation errors:\n" + "\n".join(lines)


def get_user_message(error: ApiError) -> str:
    if error.kind == ErrorKind.VALIDATION and error.field_errors:
        return format_validation_errors(error.field_errors)
    return error.message

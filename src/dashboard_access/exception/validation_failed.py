# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Validation failed exception."""

from dashboard_access.exception.base import ApiError, ErrorKind


class ValidationFailedError(ApiError):
    """Request rejected as invalid (400); may carry per-field messages."""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid request parameters"

# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Server exception."""

from dashboard_access.exception.base import ApiError, ErrorKind


class ServerError(ApiError):
    """Backend failure (5xx)."""

    kind = ErrorKind.SERVER
    default_message = "Server error. Please try again later."

# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Not found exception."""

from dashboard_access.exception.base import ApiError, ErrorKind


class NotFoundError(ApiError):
    """Not found exception."""

    kind = ErrorKind.NOT_FOUND
    default_message = "The requested resource was not found."

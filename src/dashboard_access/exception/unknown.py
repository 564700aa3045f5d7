# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Unknown API exception."""

from dashboard_access.exception.base import ApiError, ErrorKind


class UnknownApiError(ApiError):
    """Response with a status outside the known table."""

    kind = ErrorKind.UNKNOWN

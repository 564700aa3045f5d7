# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Auth exception."""

from dashboard_access.exception.base import ApiError, ErrorKind

_MESSAGES = {
    401: "You are not authenticated. Please log in.",
    403: "You do not have permission to perform this action.",
}


class AuthError(ApiError):
    """Authentication (401) or authorization (403) failure."""

    kind = ErrorKind.AUTH
    default_message = _MESSAGES[401]

    def __init__(self, message: str | None = None, *, status: int = 401, **kwargs) -> None:
        super().__init__(message or _MESSAGES.get(status), status=status, **kwargs)

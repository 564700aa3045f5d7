# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Network exception."""

from __future__ import annotations

from dashboard_access.exception.base import ApiError, ErrorKind

TIMEOUT_MESSAGE = "Request timeout. Please try again."
CONNECTIVITY_MESSAGE = "Network error. Please check your connection."


class NetworkError(ApiError):
    """No response was received. Status is always 0."""

    kind = ErrorKind.NETWORK
    default_message = CONNECTIVITY_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        *,
        is_timeout: bool = False,
        cause: BaseException | None = None,
    ) -> None:
        if message is None and is_timeout:
            message = TIMEOUT_MESSAGE
        super().__init__(message, status=0, cause=cause)
        self.is_timeout = is_timeout

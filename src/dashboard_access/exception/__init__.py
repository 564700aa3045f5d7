# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""Unified exports for the error taxonomy, classifier and retry policy."""

from dashboard_access.exception.auth import AuthError
from dashboard_access.exception.base import ApiError, ErrorKind, RecoveryAction
from dashboard_access.exception.classifier import ErrorClassifier, classify
from dashboard_access.exception.messages import format_validation_errors, get_user_message
from dashboard_access.exception.network import NetworkError
from dashboard_access.exception.not_found import NotFoundError
from dashboard_access.exception.policy import action_for, default_should_retry
from dashboard_access.exception.retry import (
    RetryContext,
    RetryPolicy,
    calculate_retry_delay,
    with_retry,
)
from dashboard_access.exception.server import ServerError
from dashboard_access.exception.unknown import UnknownApiError
from dashboard_access.exception.validation_failed import ValidationFailedError

__all__ = [
    "ErrorKind",
    "RecoveryAction",
    "ApiError",
    "NetworkError",
    "ValidationFailedError",
    "AuthError",
    "NotFoundError",
    "ServerError",
    "UnknownApiError",
    "ErrorClassifier",
    "classify",
    "format_validation_errors",
    "get_user_message",
    "action_for",
    "default_should_retry",
    "RetryContext",
    "RetryPolicy",
    "calculate_retry_delay",
    "with_retry",
]

# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Recovery policy.
"""

from __future__ import annotations

from dashboard_access.exception.base import ApiError, ErrorKind, RecoveryAction

RETRYABLE_KINDS = frozenset({ErrorKind.SERVER, ErrorKind.NETWORK})
NEVER_RETRY_KINDS = frozenset({ErrorKind.VALIDATION, ErrorKind.AUTH})


def action_for(error: ApiError) -> RecoveryAction:
    """Resolve recovery action by error kind."""
    if error.kind in RETRYABLE_KINDS:
        return RecoveryAction.RETRY
    return RecoveryAction.FAIL_FAST


def default_should_retry(error: ApiError) -> bool:
    """Retry only server and network failures."""
    return action_for(error) == RecoveryAction.RETRY

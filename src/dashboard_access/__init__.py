# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Dashboard Access - resilient data-access layer for the billing dashboard.

Quick start:
```python
from dashboard_access import DashboardSession, dashboard_configure, get_user_message

config = dashboard_configure(api={"base_url": "https://api.example.com"})

async with DashboardSession(config) as session:
    # Reference data: one request per key, shared by concurrent readers
    zones = await session.reference.timezones()

    # Preferences: optimistic, one channel at a time
    await session.preferences.refresh()
    ok = await session.preferences.set_channel("billing", "push", True)
    if not ok:
        print(get_user_message(session.preferences.last_error))
```

Lower-level building blocks are available from submodules:
- Cache: `from dashboard_access.cache import ResourceCache, CacheState`
- Errors and retry: `from dashboard_access.exception import classify, RetryPolicy, RetryContext`
- Transport: `from dashboard_access.transport import ApiClient, endpoints`
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Config
    "DashboardConfig",
    "dashboard_configure",
    "ConfigurationError",
    # Session
    "DashboardSession",
    # Errors
    "ApiError",
    "ErrorKind",
    "classify",
    "get_user_message",
    # Retry
    "RetryContext",
    "RetryPolicy",
    # Components
    "ResourceCache",
    "PreferenceStore",
    "Channel",
    "RollbackPolicy",
    "ReferenceDataService",
]

_EXPORTS: dict[str, tuple[str, str]] = {
    "DashboardConfig": ("dashboard_access.config", "DashboardConfig"),
    "dashboard_configure": ("dashboard_access.config", "dashboard_configure"),
    "ConfigurationError": ("dashboard_access.config", "ConfigurationError"),
    "DashboardSession": ("dashboard_access.session", "DashboardSession"),
    "ApiError": ("dashboard_access.exception", "ApiError"),
    "ErrorKind": ("dashboard_access.exception", "ErrorKind"),
    "classify": ("dashboard_access.exception", "classify"),
    "get_user_message": ("dashboard_access.exception", "get_user_message"),
    "RetryContext": ("dashboard_access.exception", "RetryContext"),
    "RetryPolicy": ("dashboard_access.exception", "RetryPolicy"),
    "ResourceCache": ("dashboard_access.cache", "ResourceCache"),
    "PreferenceStore": ("dashboard_access.preferences", "PreferenceStore"),
    "Channel": ("dashboard_access.preferences", "Channel"),
    "RollbackPolicy": ("dashboard_access.preferences", "RollbackPolicy"),
    "ReferenceDataService": ("dashboard_access.reference", "ReferenceDataService"),
}


def __getattr__(name: str) -> Any:
    target = _EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals()).union(__all__))

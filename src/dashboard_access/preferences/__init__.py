"""
Notification preferences.

Usage:
    from dashboard_access.preferences import PreferenceStore, Channel
"""

from dashboard_access.preferences.api import NotificationPreferencesApi
from dashboard_access.preferences.config import PreferencesConfig
from dashboard_access.preferences.models import (
    DEFAULT_PREFERENCES,
    Channel,
    ChannelUpdate,
    PreferenceRecord,
    RollbackPolicy,
    default_record,
    default_records,
)
from dashboard_access.preferences.store import PreferenceStore

__all__ = [
    "Channel",
    "ChannelUpdate",
    "PreferenceRecord",
    "RollbackPolicy",
    "DEFAULT_PREFERENCES",
    "default_record",
    "default_records",
    "PreferenceStore",
    "NotificationPreferencesApi",
    "PreferencesConfig",
]

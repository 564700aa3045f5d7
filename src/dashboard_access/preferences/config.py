"""
Preference store configuration.
"""

from pydantic import BaseModel, Field

from dashboard_access.preferences.models import RollbackPolicy


class PreferencesConfig(BaseModel):
    """Notification preference configuration."""

    rollback: RollbackPolicy = Field(
        default=RollbackPolicy.KEEP,
        description="What happens to an optimistic toggle when persisting it fails: keep or revert",
    )

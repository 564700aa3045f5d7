# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-03
"""
Notification preference models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Channel(str, Enum):
    """Notification delivery channel (wire values)."""

    EMAIL = "email"
    IN_APP = "inApp"
    PUSH = "push"
    SMS = "sms"

    @property
    def field_name(self) -> str:
        return _FIELD_NAMES[self]

    @classmethod
    def parse(cls, value: Channel | str) -> Channel:
        """Accept a Channel or its wire value (case-insensitive)."""
        if isinstance(value, Channel):
            return value
        channel = _ALIASES.get(str(value).strip().lower())
        if channel is None:
            supported = ", ".join(c.value for c in cls)
            raise ValueError(f"Unsupported channel: '{value}'. Supported: {supported}")
        return channel


_FIELD_NAMES: dict[Channel, str] = {
    Channel.EMAIL: "email_enabled",
    Channel.IN_APP: "in_app_enabled",
    Channel.PUSH: "push_enabled",
    Channel.SMS: "sms_enabled",
}

_ALIASES: dict[str, Channel] = {
    "email": Channel.EMAIL,
    "inapp": Channel.IN_APP,
    "in_app": Channel.IN_APP,
    "push": Channel.PUSH,
    "sms": Channel.SMS,
}


class RollbackPolicy(str, Enum):
    """What a failed persist does to the optimistic value."""

    KEEP = "keep"
    REVERT = "revert"


class PreferenceRecord(BaseModel):
    """
    Per-type notification preferences.

    Immutable: every change produces a new record.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type: str = Field(alias="notificationType", min_length=1)
    email_enabled: bool = Field(default=False, alias="emailEnabled")
    in_app_enabled: bool = Field(default=False, alias="inAppEnabled")
    push_enabled: bool = Field(default=False, alias="pushEnabled")
    sms_enabled: bool = Field(default=False, alias="smsEnabled")
    frequency: str | None = None

    def enabled(self, channel: Channel | str) -> bool:
        return getattr(self, Channel.parse(channel).field_name)

    def with_channel(self, channel: Channel | str, enabled: bool) -> PreferenceRecord:
        """Copy with one channel flag replaced; every other field is kept."""
        return self.model_copy(update={Channel.parse(channel).field_name: bool(enabled)})

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


DEFAULT_PREFERENCES: tuple[PreferenceRecord, ...] = (
    PreferenceRecord(type="billing", email_enabled=True, in_app_enabled=True, frequency="instant"),
    PreferenceRecord(type="security", email_enabled=True, in_app_enabled=True, frequency="instant"),
    PreferenceRecord(type="product", in_app_enabled=True, frequency="weekly"),
    PreferenceRecord(type="marketing", frequency="monthly"),
)

_DEFAULTS_BY_TYPE = {record.type: record for record in DEFAULT_PREFERENCES}


def default_record(notification_type: str) -> PreferenceRecord:
    """Known types get their category defaults, anything else all flags off."""
    record = _DEFAULTS_BY_TYPE.get(notification_type)
    if record is not None:
        return record
    return PreferenceRecord(type=notification_type)


def default_records() -> tuple[PreferenceRecord, ...]:
    return DEFAULT_PREFERENCES


@dataclass(frozen=True)
class ChannelUpdate:
    """One channel change, as handed to the persistence function."""

    type: str
    channel: Channel
    enabled: bool
    record: PreferenceRecord

    def body(self) -> dict[str, Any]:
        return {"channel": self.channel.value, "enabled": self.enabled}

"""
Backend API paths.
"""

from __future__ import annotations

from urllib.parse import quote

OPTIONS_TIMEZONES = "/user-settings/options/timezones"
OPTIONS_LANGUAGES = "/user-settings/options/languages"
OPTIONS_DATE_FORMATS = "/user-settings/options/dateformats"
OPTIONS_TIME_FORMATS = "/user-settings/options/timeformats"

COMPANY_SIZES = "/company-sizes"
COMPANY_SIZES_SEARCH = "/company-sizes/search"

NOTIFICATIONS = "/user-settings/notifications"


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def company_size(code: str) -> str:
    return f"{COMPANY_SIZES}/{_segment(code)}"


def notification_by_type(notification_type: str) -> str:
    return f"{NOTIFICATIONS}/{_segment(notification_type)}"

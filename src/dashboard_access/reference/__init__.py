"""
Reference option data.

Usage:
    from dashboard_access.reference import ReferenceDataService
"""

from dashboard_access.reference.models import (
    CompanySize,
    DateFormatOption,
    LanguageOption,
    TimeFormatOption,
    TimezoneOption,
)
from dashboard_access.reference.service import ReferenceDataService

__all__ = [
    "ReferenceDataService",
    "TimezoneOption",
    "LanguageOption",
    "DateFormatOption",
    "TimeFormatOption",
    "CompanySize",
]

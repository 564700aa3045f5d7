# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-03
"""
Reference option models.

Wire fields are camelCase; Python attributes are snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class TimezoneOption(_WireModel):
    value: str
    label: str
    standard_name: str


class LanguageOption(_WireModel):
    value: str
    label: str
    native_name: str


class DateFormatOption(_WireModel):
    value: str
    label: str
    description: str


class TimeFormatOption(_WireModel):
    value: str
    label: str
    description: str


class CompanySize(_WireModel):
    """Company size bracket, e.g. code="11-50"."""

    code: str
    name: str
    description: str | None = None
    min_employees: int | None = None
    max_employees: int | None = None

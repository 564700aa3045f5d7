# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-03
"""
Reference data service.

Option lists and company sizes are read through the shared ResourceCache.
Every cache fetch is a retry-wrapped, classified GET, so concurrent readers
of one key share a single request and only ever see ApiError on failure.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from dashboard_access.cache import ResourceCache
from dashboard_access.exception import ApiError, RetryContext, RetryPolicy, UnknownApiError
from dashboard_access.reference.models import (
    CompanySize,
    DateFormatOption,
    LanguageOption,
    TimeFormatOption,
    TimezoneOption,
)
from dashboard_access.transport import ApiClient, endpoints

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

TIMEZONES_KEY = "options:timezones"
LANGUAGES_KEY = "options:languages"
DATE_FORMATS_KEY = "options:dateformats"
TIME_FORMATS_KEY = "options:timeformats"
COMPANY_SIZES_KEY = "company-sizes"


def company_size_key(code: str) -> str:
    return f"{COMPANY_SIZES_KEY}:{code}"


def search_key(normalized_query: str) -> str:
    return f"{COMPANY_SIZES_KEY}:search:{normalized_query}"


class ReferenceDataService:
    """
    Read-mostly reference data for forms and dropdowns.

    Example:
    ```python
    service = ReferenceDataService(client, ResourceCache())
    zones = await service.timezones()
    ```
    """

    def __init__(
        self,
        client: ApiClient,
        cache: ResourceCache,
        retry_policy: RetryPolicy | None = None,
        retry_context: RetryContext | None = None,
    ) -> None:
        self._client = client
        self.cache = cache
        self._retry = retry_policy or RetryPolicy()
        self._context = retry_context

    async def timezones(self) -> list[TimezoneOption]:
        return await self.cache.get(
            TIMEZONES_KEY,
            lambda: self._fetch_list(endpoints.OPTIONS_TIMEZONES, TimezoneOption),
        )

    async def languages(self) -> list[LanguageOption]:
        return await self.cache.get(
            LANGUAGES_KEY,
            lambda: self._fetch_list(endpoints.OPTIONS_LANGUAGES, LanguageOption),
        )

    async def date_formats(self) -> list[DateFormatOption]:
        return await self.cache.get(
            DATE_FORMATS_KEY,
            lambda: self._fetch_list(endpoints.OPTIONS_DATE_FORMATS, DateFormatOption),
        )

    async def time_formats(self) -> list[TimeFormatOption]:
        return await self.cache.get(
            TIME_FORMATS_KEY,
            lambda: self._fetch_list(endpoints.OPTIONS_TIME_FORMATS, TimeFormatOption),
        )

    async def company_sizes(self) -> list[CompanySize]:
        return await self.cache.get(
            COMPANY_SIZES_KEY,
            lambda: self._fetch_list(endpoints.COMPANY_SIZES, CompanySize),
        )

    async def company_size(self, code: str) -> CompanySize:
        return await self.cache.get(
            company_size_key(code),
            lambda: self._fetch_one(endpoints.company_size(code), CompanySize),
        )

    async def search_company_sizes(self, query: str | None) -> list[CompanySize]:
        """Search by free text; a blank query returns the full list."""
        text = (query or "").strip()
        if not text:
            return await self.company_sizes()
        return await self.cache.get(
            search_key(text.lower()),
            lambda: self._fetch_list(
                endpoints.COMPANY_SIZES_SEARCH,
                CompanySize,
                params={"query": text},
            ),
        )

    async def preload_all(self) -> dict[str, bool]:
        """
        Load every option list and the company sizes concurrently.

        Keys already cached are not fetched again. One failure does not stop
        the others.

        Returns:
            Success per cache key
        """
        loaders: dict[str, Callable[[], Awaitable[Any]]] = {
            TIMEZONES_KEY: self.timezones,
            LANGUAGES_KEY: self.languages,
            DATE_FORMATS_KEY: self.date_formats,
            TIME_FORMATS_KEY: self.time_formats,
            COMPANY_SIZES_KEY: self.company_sizes,
        }
        pending = {key: loader for key, loader in loaders.items() if key not in self.cache}
        results = await asyncio.gather(
            *(loader() for loader in pending.values()),
            return_exceptions=True,
        )

        status = {key: True for key in loaders}
        for key, result in zip(pending, results):
            if isinstance(result, ApiError):
                status[key] = False
            elif isinstance(result, BaseException):
                raise result

        failed = [key for key, ok in status.items() if not ok]
        if failed:
            logger.warning(f"[ReferenceData] Preload incomplete | failed={','.join(failed)}")
        else:
            logger.info("Reference data preloaded: %s keys (%s fetched)", len(status), len(pending))
        return status

    def clear(self) -> int:
        """Invalidate every cached option list and company size entry."""
        return self.cache.invalidate_matching("options:*") + self.cache.invalidate_matching(
            f"{COMPANY_SIZES_KEY}*"
        )

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        async def fetch_reference_data() -> Any:
            return await self._client.get(path, params=params)

        return await self._retry.execute_classified(fetch_reference_data, self._context)

    async def _fetch_list(
        self,
        path: str,
        model: type[M],
        params: dict[str, Any] | None = None,
    ) -> list[M]:
        payload = await self._get(path, params)
        if payload is None:
            return []
        return _parse(TypeAdapter(list[model]), payload, path)

    async def _fetch_one(self, path: str, model: type[M]) -> M:
        payload = await self._get(path)
        return _parse(TypeAdapter(model), payload, path)


def _parse(adapter: TypeAdapter, payload: Any, path: str) -> Any:
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise UnknownApiError(f"Unexpected response payload from {path}", status=200, cause=e) from e

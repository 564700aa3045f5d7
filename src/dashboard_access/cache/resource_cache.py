# -*- coding: utf-8 -*-
# @author Sunny
# @date 2026-03-02
"""
Resource cache with in-flight request sharing.

Design:
- One entry per key: UNFETCHED -> LOADING -> LOADED | FAILED
- Concurrent get() calls for a LOADING key join the same task
- LOADED is kept until invalidate()/clear(); FAILED is retried on the next get()
- No retry of its own: wrap the fetch function for that
- A fetch must resolve to a value; None is treated as a failed load

The LOADING transition happens before the first await, so on a single event
loop two callers cannot both start a fetch for one key.
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from dashboard_access.cache.entry import CacheEntry, CacheState
from dashboard_access.log import bind_log_context

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetch = Callable[[], Awaitable[T]]


class ResourceCache:
    """
    Per-key cache for read-mostly reference data.

    Example:
    ```python
    cache = ResourceCache()
    timezones = await cache.get("options:timezones", fetch_timezones)
    ```
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    async def get(self, key: str, fetch: Fetch[T]) -> T:
        entry = self._entries.get(key)
        if entry is None:
            entry = CacheEntry(key=key)
            self._entries[key] = entry

        if entry.state == CacheState.LOADED:
            return entry.data

        if entry.state == CacheState.LOADING and entry.in_flight is not None:
            logger.debug("Joining in-flight fetch: %s", key)
            return await asyncio.shield(entry.in_flight)

        entry.state = CacheState.LOADING
        entry.data = None
        entry.error = None
        entry.in_flight = asyncio.create_task(self._load(entry, fetch))
        return await asyncio.shield(entry.in_flight)

    async def _load(self, entry: CacheEntry, fetch: Fetch[T]) -> T:
        with bind_log_context(resource_key=entry.key):
            try:
                value = await fetch()
                if value is None:
                    raise ValueError(f"Fetch for {entry.key!r} resolved to None")
            except Exception as e:
                if self._entries.get(entry.key) is entry:
                    entry.state = CacheState.FAILED
                    entry.data = None
                    entry.in_flight = None
                    entry.error = e
                logger.warning(f"[ResourceCache] Fetch failed | key={entry.key} | error={e!r}")
                raise

            if self._entries.get(entry.key) is entry:
                entry.data = value
                entry.state = CacheState.LOADED
                entry.in_flight = None
                logger.debug("Cached: %s", entry.key)
            return value

    def invalidate(self, key: str) -> bool:
        """
        Reset `key` to UNFETCHED.

        A fetch still in flight keeps serving the callers already waiting on
        it, but its result is not stored.
        """
        entry = self._entries.pop(key, None)
        if entry is None:
            return False
        logger.debug("Invalidated: %s (was %s)", key, entry.state.value)
        return True

    def invalidate_matching(self, pattern: str) -> int:
        """Invalidate every key matching a glob pattern. Returns count."""
        keys = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
        for key in keys:
            self.invalidate(key)
        return len(keys)

    def clear(self) -> None:
        """Drop all entries (application-level reset, e.g. logout)."""
        count = len(self._entries)
        self._entries.clear()
        logger.info("Resource cache cleared: %s entries", count)

    def state(self, key: str) -> CacheState:
        entry = self._entries.get(key)
        return entry.state if entry is not None else CacheState.UNFETCHED

    def peek(self, key: str) -> Any | None:
        """Cached value if LOADED, else None. Never fetches."""
        entry = self._entries.get(key)
        if entry is None or entry.state != CacheState.LOADED:
            return None
        return entry.data

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key) if isinstance(key, str) else None
        return entry is not None and entry.state == CacheState.LOADED

    def __len__(self) -> int:
        return len(self._entries)

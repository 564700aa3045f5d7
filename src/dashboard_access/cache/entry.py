"""
Cache entry types.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any


class CacheState(str, Enum):
    """Per-key load state."""

    UNFETCHED = "unfetched"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class CacheEntry:
    """
    State machine for one cache key.

    `data` is only meaningful while LOADED; `in_flight` is only set while
    LOADING. `error` keeps the last failure for inspection and is never served.
    """

    key: str
    data: Any = None
    state: CacheState = CacheState.UNFETCHED
    in_flight: asyncio.Task | None = None
    error: BaseException | None = None

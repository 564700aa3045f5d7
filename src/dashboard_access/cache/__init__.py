"""
Reference data cache.

Usage:
    from dashboard_access.cache import ResourceCache, CacheState
"""

from dashboard_access.cache.config import CacheConfig
from dashboard_access.cache.entry import CacheEntry, CacheState
from dashboard_access.cache.resource_cache import ResourceCache

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheState",
    "ResourceCache",
]

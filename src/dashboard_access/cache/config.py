"""
Cache configuration.
"""

from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    """Reference data cache configuration."""

    preload_on_start: bool = Field(
        default=False,
        description="Load every option list and company sizes when the session starts",
    )

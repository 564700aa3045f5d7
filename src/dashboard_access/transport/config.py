"""
Transport configuration.
"""

from pydantic import BaseModel, Field


def _default_headers() -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


class ApiConfig(BaseModel):
    """Backend API configuration."""

    base_url: str = Field(
        default="http://localhost:5000",
        description="Backend API base URL",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout (seconds); expiry is classified as a network error",
    )
    headers: dict[str, str] = Field(
        default_factory=_default_headers,
        description="Default headers sent with every request",
    )


class RetryConfig(BaseModel):
    """Retry configuration."""

    max_attempts: int = Field(default=3, ge=1, description="Total tries, including the first one")
    initial_delay_ms: int = Field(default=1000, ge=0, description="Delay before the second try (ms)")
    max_delay_ms: int | None = Field(default=None, gt=0, description="Upper bound for a single delay (ms)")
    jitter: bool = Field(default=False, description="Randomize delays by +/-25%")

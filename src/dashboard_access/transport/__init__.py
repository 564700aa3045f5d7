"""
Backend transport.

Usage:
    from dashboard_access.transport import ApiClient, ApiConfig, endpoints
"""

from dashboard_access.transport import endpoints
from dashboard_access.transport.client import ApiClient
from dashboard_access.transport.config import ApiConfig, RetryConfig
from dashboard_access.transport.envelope import ApiEnvelope, unwrap_envelope

__all__ = [
    "ApiClient",
    "ApiConfig",
    "RetryConfig",
    "ApiEnvelope",
    "unwrap_envelope",
    "endpoints",
]

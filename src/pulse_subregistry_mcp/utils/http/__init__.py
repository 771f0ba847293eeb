"""HTTP utilities public API (barrel module).

This package provides:
- Async Sub-Registry API client
- Retry decorator with jittered backoff

Recommended import pattern for consumers:
    from pulse_subregistry_mcp.utils.http import SubregistryClient, async_retry
"""

from .registry_client import API_VERSION, SubregistryClient
from .retry import RETRYABLE_STATUS_CODES, async_retry

__all__ = [
    "API_VERSION",
    "RETRYABLE_STATUS_CODES",
    "SubregistryClient",
    "async_retry",
]

"""HTTPX wrapper used by every remote client.

Exposes a small surface:
- AsyncApiClient: async client, one attempt per request
- HttpClientConfig: configuration
- Exceptions: ApiError and subclasses
- ApiKeyAuth: static header authentication
"""

from figmabridge.core.api.http.auth import ApiKeyAuth
from figmabridge.core.api.http.client import AsyncApiClient
from figmabridge.core.api.http.config import HttpClientConfig
from figmabridge.core.api.http.errors import (
    ApiError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    TimeoutError,
)

__all__ = [
    "AsyncApiClient",
    "HttpClientConfig",
    "ApiKeyAuth",
    "ApiError",
    "NetworkError",
    "TimeoutError",
    "DecodeError",
    "HttpStatusError",
]

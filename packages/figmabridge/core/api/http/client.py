"""Async HTTP client wrapper built on HTTPX.

Provides:
- Structured error handling
- Request/response logging with redaction
- Header auth integration (API key)
- JSON and pydantic response parsing

Every request is sent exactly once; retry policy belongs to callers.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter

from figmabridge.core.api.http.config import HttpClientConfig
from figmabridge.core.api.http.errors import (
    ApiError,
    DecodeError,
    HttpStatusError,
    NetworkError,
    TimeoutError,
)
from figmabridge.core.api.http.logging_utils import RequestLogContext, log_request, log_response
from figmabridge.core.api.http.utils import get_request_id, join_url, safe_snippet

T = TypeVar("T")


def _default_request_id() -> str:
    """Generate simple timestamp-based request ID."""
    return f"req_{int(time.time() * 1000)}"


def _build_api_error(
    *,
    exc_type: type[ApiError],
    message: str,
    method: str,
    url: str,
    status_code: int | None = None,
    response: httpx.Response | None = None,
    request_id: str | None = None,
    body_snippet_limit: int = 4096,
    cause: BaseException | None = None,
) -> ApiError:
    """Build API error with response context.

    Args:
        exc_type: Error class to instantiate
        message: Human-readable error message
        method: HTTP method
        url: Request URL
        status_code: HTTP status code (if available)
        response: HTTP response (if available)
        request_id: Request ID for tracing
        body_snippet_limit: Max bytes to include in error
        cause: Original exception that triggered this error

    Returns:
        Constructed API error
    """
    headers: dict[str, str] | None = None
    snippet: str | None = None
    reason: str | None = None
    if response is not None:
        headers = dict(response.headers)
        snippet = safe_snippet(response.content or b"", body_snippet_limit)
        reason = response.reason_phrase or None
        request_id = request_id or get_request_id(response.headers)

    return exc_type(
        message=message,
        method=method,
        url=url,
        status_code=status_code,
        reason=reason,
        request_id=request_id,
        response_headers=headers,
        response_body_snippet=snippet,
        cause=cause,
    )


class AsyncApiClient:
    """Asynchronous HTTP API client.

    Built on httpx.AsyncClient with structured errors and debug logging.

    Args:
        config: Client configuration
        auth: Optional authentication handler (e.g. ApiKeyAuth)
        transport: Optional custom transport (useful for testing)

    Example:
        >>> config = HttpClientConfig(base_url="https://api.figma.com/v1")
        >>> async with AsyncApiClient(config) as client:
        ...     resp = await client.get("/me")
        ...     data = client.json(resp)
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        auth: httpx.Auth | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent, **config.headers},
            params=config.params,
            timeout=config.timeout,
            limits=config.limits,
            follow_redirects=config.follow_redirects,
            auth=auth,
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        """True once the underlying client can no longer send requests."""
        return self._client.is_closed

    async def aclose(self) -> None:
        """Close the underlying HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncApiClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: httpx.Timeout | None = None,
    ) -> httpx.Response:
        """Send a request once, normalizing every failure into an ApiError.

        Raises:
            HttpStatusError: Status >= 400
            TimeoutError: The request timed out
            NetworkError: Any other transport failure
        """
        method_u = method.upper()
        url = join_url(str(self._client.base_url), path)
        req_id = headers.get("X-Request-Id") if headers else None
        req_id = req_id or _default_request_id()

        merged_headers = dict(self._client.headers)
        if headers:
            merged_headers.update(headers)
        merged_headers.setdefault("X-Request-Id", req_id)

        query = {k: str(v) for k, v in params.items()} if params else None

        ctx = RequestLogContext(method=method_u, url=url, request_id=req_id)
        start = log_request(ctx, merged_headers, self.config.redact_headers)

        try:
            resp = await self._client.request(
                method_u,
                url,
                params=query,
                headers=merged_headers,
                timeout=timeout or self.config.timeout,
            )
        except httpx.TimeoutException as e:
            raise _build_api_error(
                exc_type=TimeoutError,
                message="Request timed out",
                method=method_u,
                url=url,
                request_id=req_id,
                cause=e,
            ) from e
        except httpx.RequestError as e:
            raise _build_api_error(
                exc_type=NetworkError,
                message="Network error while sending request",
                method=method_u,
                url=url,
                request_id=req_id,
                cause=e,
            ) from e

        log_response(ctx, resp.status_code, time.perf_counter() - start)

        if resp.status_code >= 400:
            raise _build_api_error(
                exc_type=HttpStatusError,
                message="HTTP error response",
                method=method_u,
                url=url,
                status_code=resp.status_code,
                response=resp,
                request_id=req_id,
                body_snippet_limit=self.config.max_response_body_for_error,
            )

        return resp

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Perform GET request.

        Args:
            path: Request path (relative to base_url) or absolute URL
            **kwargs: Additional arguments passed to request()

        Raises:
            ApiError: On request failure
        """
        return await self.request("GET", path, **kwargs)

    def json(self, response: httpx.Response) -> Any:
        """Decode a JSON response body with structured error handling.

        The body is decoded whatever the ``content-type`` says.

        Raises:
            DecodeError: If the body is not valid JSON
        """
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise _build_api_error(
                exc_type=DecodeError,
                message="Failed to parse JSON response",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                response=response,
                body_snippet_limit=self.config.max_response_body_for_error,
                cause=e,
            ) from e

    def parse(self, response: httpx.Response, model: type[T]) -> T:
        """Parse and validate a JSON response as ``model``.

        ``model`` is anything pydantic can build a TypeAdapter for: a
        BaseModel subclass, ``dict[str, Any]``, a TypedDict and so on.

        Raises:
            DecodeError: If JSON parsing or validation fails
        """
        data = self.json(response)
        try:
            return TypeAdapter(model).validate_python(data)
        except Exception as e:
            raise _build_api_error(
                exc_type=DecodeError,
                message="Failed to validate response",
                method=response.request.method,
                url=str(response.request.url),
                status_code=response.status_code,
                response=response,
                body_snippet_limit=self.config.max_response_body_for_error,
                cause=e,
            ) from e

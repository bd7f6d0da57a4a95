"""Figma REST API client.

Single authenticated entry point for every remote call made by figmabridge.
Uses the framework async HTTP client and normalizes all of its failures into
FigmaApiError / FigmaTransportError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from figmabridge.core.api.figma.errors import FigmaApiError, FigmaTransportError
from figmabridge.core.api.http import (
    ApiError,
    ApiKeyAuth,
    AsyncApiClient,
    DecodeError,
    HttpClientConfig,
)
from figmabridge.core.config.models import FigmaConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIGMA_TOKEN_HEADER = "X-Figma-Token"

_CLOSED_CLIENT_MESSAGE = (
    "The Figma HTTP client has already been closed, so no request to the Figma API "
    "can be sent. This cannot be fixed by retrying: create a new FigmaSession (or a "
    "new FigmaClient) and keep it open for the duration of the work."
)


class RemoteClient(Protocol):
    """Capability: issue an authenticated GET and return a typed value."""

    async def request(
        self,
        endpoint: str,
        model: type[T],
        params: Mapping[str, Any] | None = None,
    ) -> T:
        """Fetch ``endpoint`` and validate the JSON body as ``model``.

        Raises:
            FigmaApiError: Remote answered with a failure status
            FigmaTransportError: The call could not be completed
        """
        ...


class FigmaClient:
    """Authenticated Figma REST client.

    Args:
        api_key: Personal access token sent as ``X-Figma-Token``
        http_client: Framework AsyncApiClient pointed at the Figma base URL

    Example:
        >>> client = FigmaClient.from_config(FigmaConfig(api_key="figd_..."))
        >>> fills = await client.request("/files/ABC123/images", ImageFillsResponse)
    """

    def __init__(self, api_key: str | None, http_client: AsyncApiClient):
        if not api_key:
            raise ValueError("Figma API key is required")

        self.api_key = api_key
        self.http_client = http_client

    @classmethod
    def from_config(cls, config: FigmaConfig, *, transport: Any = None) -> FigmaClient:
        """Build a client and its HTTP layer from configuration.

        Args:
            config: Figma section of the app config
            transport: Optional httpx transport (tests)

        Raises:
            ValueError: If no API key is configured
        """
        if not config.api_key:
            raise ValueError("Figma API key is required")

        http_config = HttpClientConfig(
            base_url=config.base_url,
            timeout=config.httpx_timeout(),
            user_agent=config.user_agent,
        )
        http_client = AsyncApiClient(
            http_config,
            auth=ApiKeyAuth(header_name=FIGMA_TOKEN_HEADER, api_key=config.api_key),
            transport=transport,
        )
        return cls(api_key=config.api_key, http_client=http_client)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()

    async def request(
        self,
        endpoint: str,
        model: type[T],
        params: Mapping[str, Any] | None = None,
    ) -> T:
        """Issue an authenticated GET and parse the body as ``model``.

        Args:
            endpoint: Path below the API base URL (e.g. "/files/ABC123")
            model: Target type for the JSON body
            params: Query parameters

        Returns:
            Validated response

        Raises:
            FigmaApiError: Figma responded with a non-success status
            FigmaTransportError: Network failure, timeout, closed client or
                a body that is not the expected JSON
        """
        if self.http_client.is_closed:
            raise FigmaTransportError(_CLOSED_CLIENT_MESSAGE)

        logger.info(f"Calling {endpoint}")

        try:
            response = await self.http_client.get(endpoint, params=params)
            return self.http_client.parse(response, model)
        except DecodeError as e:
            raise FigmaTransportError(f"Failed to make request to Figma API: {e.message}") from e
        except ApiError as e:
            if e.status_code is not None:
                raise FigmaApiError(e.status_code, e.reason or "Unknown error") from e
            raise FigmaTransportError(f"Failed to make request to Figma API: {e.message}") from e

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
from pydantic import BaseModel, Field


class ApiKeyAuth(httpx.Auth, BaseModel):
    """Static API key header authentication.

    Args:
        header_name: Header name for the API key (e.g. "X-Figma-Token")
        api_key: API key value
        prefix: Optional prefix for the key value (e.g. "Bearer")

    Example:
        >>> auth = ApiKeyAuth(header_name="X-Figma-Token", api_key="figd_...")
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    header_name: str
    api_key: str = Field(repr=False)  # Don't leak secrets in repr
    prefix: str | None = None

    def header_value(self) -> str:
        """Header value sent with every request."""
        return f"{self.prefix} {self.api_key}" if self.prefix else self.api_key

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        """Apply API key to request.

        Args:
            request: Request to authenticate

        Yields:
            Request with API key header
        """
        request.headers[self.header_name] = self.header_value()
        yield request

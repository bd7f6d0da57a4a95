"""Shared pytest fixtures for figmabridge tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import TypeAdapter
import pytest

from figmabridge.core.assets import ImageDownloader
from figmabridge.core.io import FakeFileSystem

# ============================================================================
# Remote client doubles
# ============================================================================

Handler = Callable[[str, dict[str, Any]], Any]


class ScriptedRemoteClient:
    """RemoteClient double that answers from a handler and records calls.

    The handler receives (endpoint, params) and returns a JSON-like payload
    or raises. Payloads are validated as the requested model, just like the
    real client.
    """

    def __init__(self, handler: Handler):
        self.handler = handler
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def request(self, endpoint: str, model: Any, params: Mapping[str, Any] | None = None):
        call_params = dict(params or {})
        self.calls.append((endpoint, call_params))
        payload = self.handler(endpoint, call_params)
        return TypeAdapter(model).validate_python(payload)

    def calls_to(self, endpoint: str) -> list[dict[str, Any]]:
        return [params for ep, params in self.calls if ep == endpoint]


@pytest.fixture
def scripted_client() -> Callable[[Handler], ScriptedRemoteClient]:
    """Factory for ScriptedRemoteClient."""
    return ScriptedRemoteClient


# ============================================================================
# Download doubles
# ============================================================================


class ImageServer:
    """In-memory image host served through httpx.MockTransport.

    Unknown URLs answer 404; URLs in ``broken`` fail at the connection level.
    """

    def __init__(self, images: dict[str, bytes] | None = None, broken: set[str] | None = None):
        self.images = dict(images or {})
        self.broken = set(broken or set())
        self.requested: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        if url in self.broken:
            raise httpx.ConnectError("connection refused", request=request)
        if url not in self.images:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, content=self.images[url], headers={"content-type": "image/png"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def image_server() -> ImageServer:
    return ImageServer()


@pytest.fixture
def fs() -> FakeFileSystem:
    """Provide fresh FakeFileSystem instance."""
    return FakeFileSystem()


@pytest.fixture
async def download_client(image_server: ImageServer):
    async with httpx.AsyncClient(transport=image_server.transport()) as client:
        yield client


@pytest.fixture
def downloader(download_client: httpx.AsyncClient, fs: FakeFileSystem) -> ImageDownloader:
    return ImageDownloader(download_client, fs=fs)

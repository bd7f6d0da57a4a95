"""Tests for FigmaSession wiring."""

from __future__ import annotations

import httpx
import pytest

from figmabridge.core.assets import ImageRequest
from figmabridge.core.config import AppConfig, ExecutionMode, UnmatchedPolicy
from figmabridge.core.io import FakeFileSystem
from figmabridge.core.logging import NullPayloadDumper, YAMLPayloadDumper
from figmabridge.core.session import FigmaSession


def config(**updates) -> AppConfig:
    return AppConfig.model_validate({"figma": {"api_key": "figd_test"}, **updates})


class TestConstruction:
    def test_api_key_override(self):
        session = FigmaSession(AppConfig(), api_key="figd_override")
        assert session.app_config.figma.api_key == "figd_override"

    def test_rejects_wrong_type(self):
        with pytest.raises(TypeError, match="Expected AppConfig"):
            FigmaSession(42)  # type: ignore[arg-type]

    def test_loads_config_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FIGMABRIDGE_MODE", raising=False)
        path = tmp_path / "figmabridge.yaml"
        path.write_text("mode: development\n")

        assert FigmaSession(path).app_config.mode is ExecutionMode.DEVELOPMENT

    def test_missing_key_fails_on_client_access(self, monkeypatch):
        monkeypatch.delenv("FIGMA_API_KEY", raising=False)
        session = FigmaSession(AppConfig())
        with pytest.raises(ValueError, match="API key is required"):
            session.figma_client


class TestComponents:
    def test_components_are_cached(self):
        session = FigmaSession(config())
        assert session.pipeline is session.pipeline
        assert session.fill_resolver.client is session.figma_client
        assert session.export_resolver.downloader is session.downloader

    def test_dumper_follows_mode(self):
        assert isinstance(FigmaSession(config()).dumper, NullPayloadDumper)
        assert isinstance(FigmaSession(config(mode="cli")).dumper, NullPayloadDumper)
        assert isinstance(FigmaSession(config(mode="development")).dumper, YAMLPayloadDumper)

    def test_unmatched_policy_from_config(self):
        session = FigmaSession(config(assets={"unmatched_renders": "empty"}))
        assert session.export_resolver.unmatched is UnmatchedPolicy.EMPTY

    async def test_aclose_closes_clients(self):
        session = FigmaSession(config())
        client = session.figma_client
        downloads = session.download_client

        await session.aclose()

        assert client.http_client.is_closed
        assert downloads.is_closed


async def test_end_to_end_development_mode():
    def figma_api(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/files/ABC123":
            return httpx.Response(
                200,
                json={
                    "name": "Landing",
                    "document": {
                        "id": "0:0",
                        "type": "DOCUMENT",
                        "children": [
                            {"id": "1:1", "name": "Hero", "fills": [{"type": "IMAGE", "imageRef": "ref-hero"}]}
                        ],
                    },
                },
            )
        return httpx.Response(200, json={"meta": {"images": {"ref-hero": "https://cdn.test/hero"}}})

    fs = FakeFileSystem()
    async with FigmaSession(
        config(mode="development"),
        fs=fs,
        transport=httpx.MockTransport(figma_api),
        download_transport=httpx.MockTransport(lambda r: httpx.Response(200, content=b"hero")),
    ) as session:
        design = await session.retriever.get_file("ABC123")
        paths = await session.pipeline.resolve_images("ABC123", design.fill_requests(), "images")
        extra = await session.pipeline.resolve_images(
            "ABC123", [ImageRequest.fill("9:9", "none.png", "ref-none")], "images"
        )

    assert paths == ["images/1_1.png"]
    assert extra == [""]
    assert await fs.read_bytes("images/1_1.png") == b"hero"
    assert await fs.exists("logs/figma-raw.yml")
    assert await fs.exists("logs/figma-simplified.yml")

"""figmabridge session coordinator.

The session turns one AppConfig into the objects that do the work: the Figma
client, the downloader, both asset resolvers, the asset pipeline and the tree
retriever. Every component receives its configuration through its
constructor, so nothing reads global state after the session is built.

Example:
    async with FigmaSession(api_key="figd_...") as session:
        design = await session.retriever.get_file("ABC123")
        paths = await session.pipeline.resolve_images(
            "ABC123", design.fill_requests(), "images"
        )
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from figmabridge.core.api.figma.client import FigmaClient
from figmabridge.core.assets import AssetPipeline, ExportResolver, FillResolver, ImageDownloader
from figmabridge.core.config.models import AppConfig
from figmabridge.core.design import TreeRetriever
from figmabridge.core.io import FileSystem, RealFileSystem
from figmabridge.core.logging import NullPayloadDumper, PayloadDumper, YAMLPayloadDumper

logger = logging.getLogger(__name__)


class FigmaSession:
    """Owns the HTTP clients and lazily builds every component.

    Use as an async context manager (or call ``aclose``) so both HTTP
    clients are closed.
    """

    def __init__(
        self,
        app_config: AppConfig | Path | str | None = None,
        *,
        api_key: str | None = None,
        fs: FileSystem | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        download_transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize session.

        Args:
            app_config: AppConfig instance, path to a config file, or None
                (default path plus environment)
            api_key: Overrides the configured Figma API key
            fs: Filesystem for downloads and dumps (default RealFileSystem)
            transport: httpx transport for Figma API calls (tests)
            download_transport: httpx transport for image downloads (tests)

        Raises:
            TypeError: If app_config has an unsupported type
            ValidationError: If the config is invalid
        """
        config = self._resolve_config(app_config)
        if api_key:
            config = config.model_copy(
                update={"figma": config.figma.model_copy(update={"api_key": api_key})}
            )

        self.app_config: AppConfig = config
        self.fs: FileSystem = fs or RealFileSystem()
        self._transport = transport
        self._download_transport = download_transport

        logger.debug(f"Session initialized: mode={config.mode.value}")

    @staticmethod
    def _resolve_config(value: Any) -> AppConfig:
        if value is None:
            return AppConfig.load_or_default()
        if isinstance(value, (Path, str)):
            return AppConfig.load_or_default(Path(value))
        if isinstance(value, AppConfig):
            return value
        raise TypeError(f"Expected AppConfig, Path, str, or None; got {type(value).__name__}")

    @property
    def figma_client(self) -> FigmaClient:
        """Authenticated Figma client.

        Raises:
            ValueError: If no API key is configured
        """
        if not hasattr(self, "_figma_client"):
            self._figma_client = FigmaClient.from_config(
                self.app_config.figma, transport=self._transport
            )
        return self._figma_client

    @property
    def download_client(self) -> httpx.AsyncClient:
        """Unauthenticated client used to fetch image URLs."""
        if not hasattr(self, "_download_client"):
            self._download_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.app_config.assets.download_timeout_s),
                follow_redirects=True,
                transport=self._download_transport,
            )
        return self._download_client

    @property
    def dumper(self) -> PayloadDumper:
        """YAML dumps in development mode, nothing otherwise."""
        if not hasattr(self, "_dumper"):
            if self.app_config.dumps_enabled:
                self._dumper: PayloadDumper = YAMLPayloadDumper(
                    self.app_config.debug.dump_dir, fs=self.fs
                )
            else:
                self._dumper = NullPayloadDumper()
        return self._dumper

    @property
    def downloader(self) -> ImageDownloader:
        if not hasattr(self, "_downloader"):
            self._downloader = ImageDownloader(self.download_client, fs=self.fs)
        return self._downloader

    @property
    def fill_resolver(self) -> FillResolver:
        if not hasattr(self, "_fill_resolver"):
            self._fill_resolver = FillResolver(self.figma_client, self.downloader)
        return self._fill_resolver

    @property
    def export_resolver(self) -> ExportResolver:
        if not hasattr(self, "_export_resolver"):
            self._export_resolver = ExportResolver(
                self.figma_client,
                self.downloader,
                unmatched=self.app_config.assets.unmatched_renders,
            )
        return self._export_resolver

    @property
    def pipeline(self) -> AssetPipeline:
        if not hasattr(self, "_pipeline"):
            self._pipeline = AssetPipeline(self.fill_resolver, self.export_resolver)
        return self._pipeline

    @property
    def retriever(self) -> TreeRetriever:
        if not hasattr(self, "_retriever"):
            self._retriever = TreeRetriever(self.figma_client, dumper=self.dumper)
        return self._retriever

    async def aclose(self) -> None:
        """Close whichever HTTP clients were created."""
        if hasattr(self, "_figma_client"):
            await self._figma_client.aclose()
        if hasattr(self, "_download_client"):
            await self._download_client.aclose()

    async def __aenter__(self) -> FigmaSession:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

"""Resolution of bitmap fills (images already embedded in a file)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from figmabridge.core.api.figma.client import RemoteClient
from figmabridge.core.api.figma.models import ImageFillsResponse

from .downloader import ImageDownloader
from .models import AssetOutcome, ImageRequest, ResolvedAsset

logger = logging.getLogger(__name__)


class FillResolver:
    """Turns fill references into local files.

    One call to ``GET /files/{key}/images`` resolves every fill reference of
    the file; each request then downloads independently.

    Every request keeps its slot in the result: a reference with no URL
    yields "".
    """

    def __init__(self, client: RemoteClient, downloader: ImageDownloader):
        self.client = client
        self.downloader = downloader

    async def fetch_fill_map(self, file_id: str) -> dict[str, str]:
        """Fill reference -> URL for the whole file.

        Raises:
            FigmaApiError, FigmaTransportError: From the remote client
        """
        response = await self.client.request(f"/files/{file_id}/images", ImageFillsResponse)
        return dict(response.images)

    async def resolve_fills_detailed(
        self,
        file_id: str,
        fill_requests: Sequence[ImageRequest],
        target_dir: str | Path,
    ) -> list[AssetOutcome]:
        """Resolve and download fills, one outcome per request in input order.

        Raises:
            ValueError: If a request is not a fill request
            FigmaApiError, FigmaTransportError: If the fill map cannot be fetched
        """
        if not fill_requests:
            return []

        for request in fill_requests:
            if not request.is_fill:
                raise ValueError(f"Not a fill request: {request.node_id}")

        mapping = await self.fetch_fill_map(file_id)

        resolved = [
            ResolvedAsset(request=r, remote_url=mapping.get(r.fill_ref or "") or None)
            for r in fill_requests
        ]
        missing = sum(1 for a in resolved if not a.is_resolved)
        if missing:
            logger.info(f"{missing} of {len(resolved)} fill references have no image URL")

        return list(
            await asyncio.gather(
                *(self.downloader.download_asset(a, target_dir) for a in resolved)
            )
        )

    async def resolve_fills(
        self,
        file_id: str,
        fill_requests: Sequence[ImageRequest],
        target_dir: str | Path,
    ) -> list[str]:
        """Local path per request, "" where unresolved or not downloaded."""
        outcomes = await self.resolve_fills_detailed(file_id, fill_requests, target_dir)
        return [o.collapse() for o in outcomes]

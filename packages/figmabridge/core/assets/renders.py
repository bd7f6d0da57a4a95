"""Resolution of rendered exports (png raster and svg vector).

Requests are grouped by format and each non-empty group is resolved with a
single ``GET /images/{key}`` call. Both calls run concurrently and must both
succeed before any download starts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from figmabridge.core.api.figma.client import RemoteClient
from figmabridge.core.api.figma.models import ImagesResponse
from figmabridge.core.config.models import UnmatchedPolicy

from .downloader import ImageDownloader
from .models import AssetOutcome, AssetStatus, ImageFormat, ImageRequest, ResolvedAsset
from .utils import gather_all

logger = logging.getLogger(__name__)

RASTER_SCALE = 2

RenderMap = dict[str, str | None]


def partition_by_format(
    requests: Sequence[ImageRequest],
) -> tuple[list[ImageRequest], list[ImageRequest]]:
    """Split render requests into (png, svg) groups, keeping input order.

    Raises:
        ValueError: If a request is not a render request
    """
    png: list[ImageRequest] = []
    svg: list[ImageRequest] = []
    for request in requests:
        if request.is_fill:
            raise ValueError(f"Not a render request: {request.node_id}")
        (svg if request.format == "svg" else png).append(request)
    return png, svg


def merge_mappings(*mappings: Mapping[str, str | None]) -> RenderMap:
    """Merge node id -> URL maps into a new dict; later maps win."""
    merged: RenderMap = {}
    for mapping in mappings:
        merged.update(mapping)
    return merged


def match_requests(
    requests: Sequence[ImageRequest], mapping: Mapping[str, str | None]
) -> list[ResolvedAsset]:
    """Pair every request with its URL (None when absent or null)."""
    return [ResolvedAsset(request=r, remote_url=mapping.get(r.node_id) or None) for r in requests]


class ExportResolver:
    """Turns node ids into rendered image files.

    Args:
        client: Remote client
        downloader: Image downloader
        unmatched: What collapsed results report for requests without a URL.
            DROP (default) leaves them out; EMPTY keeps a "" slot.
    """

    def __init__(
        self,
        client: RemoteClient,
        downloader: ImageDownloader,
        unmatched: UnmatchedPolicy = UnmatchedPolicy.DROP,
    ):
        self.client = client
        self.downloader = downloader
        self.unmatched = unmatched

    async def fetch_render_map(
        self, file_id: str, node_ids: Sequence[str], fmt: ImageFormat
    ) -> RenderMap:
        """Node id -> URL for one format group; no call for an empty group."""
        if not node_ids:
            return {}

        params: dict[str, Any] = {"ids": ",".join(node_ids)}
        if fmt == "png":
            params["scale"] = RASTER_SCALE
        params["format"] = fmt

        response = await self.client.request(f"/images/{file_id}", ImagesResponse, params=params)
        return dict(response.images)

    async def resolve_renders_detailed(
        self,
        file_id: str,
        render_requests: Sequence[ImageRequest],
        target_dir: str | Path,
    ) -> list[AssetOutcome]:
        """Resolve and download renders, one outcome per request in input order.

        Raises:
            ValueError: If a request is not a render request
            FigmaApiError, FigmaTransportError: If either format group fails
        """
        png, svg = partition_by_format(render_requests)
        if not png and not svg:
            return []

        png_map, svg_map = await gather_all(
            self.fetch_render_map(file_id, [r.node_id for r in png], "png"),
            self.fetch_render_map(file_id, [r.node_id for r in svg], "svg"),
        )
        mapping = merge_mappings(png_map, svg_map)

        resolved = match_requests(render_requests, mapping)
        missing = sum(1 for a in resolved if not a.is_resolved)
        if missing:
            logger.info(f"{missing} of {len(resolved)} nodes could not be rendered")

        return list(
            await asyncio.gather(
                *(self.downloader.download_asset(a, target_dir) for a in resolved)
            )
        )

    async def resolve_renders(
        self,
        file_id: str,
        render_requests: Sequence[ImageRequest],
        target_dir: str | Path,
    ) -> list[str]:
        """Local path per rendered request.

        Unresolved requests are dropped or kept as "" depending on the
        unmatched policy; failed downloads are always kept as "".
        """
        outcomes = await self.resolve_renders_detailed(file_id, render_requests, target_dir)
        if self.unmatched is UnmatchedPolicy.DROP:
            outcomes = [o for o in outcomes if o.status is not AssetStatus.UNRESOLVED]
        return [o.collapse() for o in outcomes]

"""Single entry point over both asset sources."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .fills import FillResolver
from .models import AssetOutcome, ImageRequest
from .renders import ExportResolver
from .utils import gather_all


def split_requests(
    requests: Sequence[ImageRequest],
) -> tuple[list[ImageRequest], list[ImageRequest]]:
    """(fill requests, render requests), each in input order."""
    fills = [r for r in requests if r.is_fill]
    renders = [r for r in requests if not r.is_fill]
    return fills, renders


class AssetPipeline:
    """Resolves a mixed list of fill and render requests.

    Results list fill outcomes first, then render outcomes. If either
    resolver fails, the other still finishes before the error is raised.
    """

    def __init__(self, fills: FillResolver, renders: ExportResolver):
        self.fills = fills
        self.renders = renders

    async def resolve_images(
        self, file_id: str, requests: Sequence[ImageRequest], target_dir: str | Path
    ) -> list[str]:
        fill_requests, render_requests = split_requests(requests)
        fill_paths, render_paths = await gather_all(
            self.fills.resolve_fills(file_id, fill_requests, target_dir),
            self.renders.resolve_renders(file_id, render_requests, target_dir),
        )
        return [*fill_paths, *render_paths]

    async def resolve_images_detailed(
        self, file_id: str, requests: Sequence[ImageRequest], target_dir: str | Path
    ) -> list[AssetOutcome]:
        fill_requests, render_requests = split_requests(requests)
        fill_outcomes, render_outcomes = await gather_all(
            self.fills.resolve_fills_detailed(file_id, fill_requests, target_dir),
            self.renders.resolve_renders_detailed(file_id, render_requests, target_dir),
        )
        return [*fill_outcomes, *render_outcomes]

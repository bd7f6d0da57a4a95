"""Remote asset resolution: fills, rendered exports and downloads."""

from .downloader import DownloadError, ImageDownloader
from .fills import FillResolver
from .models import (
    AssetKind,
    AssetOutcome,
    AssetStatus,
    DownloadOutcome,
    ImageFormat,
    ImageRequest,
    ResolvedAsset,
)
from .pipeline import AssetPipeline, split_requests
from .renders import ExportResolver, match_requests, merge_mappings, partition_by_format

__all__ = [
    "AssetKind",
    "AssetOutcome",
    "AssetPipeline",
    "AssetStatus",
    "DownloadError",
    "DownloadOutcome",
    "ExportResolver",
    "FillResolver",
    "ImageDownloader",
    "ImageFormat",
    "ImageRequest",
    "ResolvedAsset",
    "match_requests",
    "merge_mappings",
    "partition_by_format",
    "split_requests",
]

"""Image downloads.

A failure is raised as DownloadError by ``download`` and turned into a
failed AssetOutcome by ``download_asset``, so one broken image never aborts
the downloads running beside it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from figmabridge.core.io import FileSystem, RealFileSystem

from .models import AssetOutcome, AssetStatus, ResolvedAsset

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    """A single image could not be fetched or written."""

    def __init__(self, url: str, path: str, reason: str):
        self.url = url
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to download {url} to {path}: {reason}")


class ImageDownloader:
    """Fetches image URLs and writes them below a target directory.

    Image URLs are pre-signed, so the HTTP client carries no Figma
    credentials.

    Args:
        http_client: Client used for the downloads (owned by the caller)
        fs: Filesystem used for writes
    """

    def __init__(self, http_client: httpx.AsyncClient, fs: FileSystem | None = None):
        self.http_client = http_client
        self.fs: FileSystem = fs or RealFileSystem()

    async def download(self, file_name: str, target_dir: str | Path, url: str) -> str:
        """Download ``url`` into ``target_dir/file_name``.

        The directory is created if missing.

        Returns:
            Path of the written file as a string

        Raises:
            DownloadError: Malformed URL, fetch failed, non-success status or
                write failed
        """
        path = Path(target_dir) / file_name

        try:
            response = await self.http_client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DownloadError(url, str(path), f"{type(e).__name__}: {e}") from e

        if response.is_error:
            raise DownloadError(url, str(path), f"HTTP {response.status_code}")

        try:
            await self.fs.mkdirs(target_dir)
            result = await self.fs.write_bytes(path, response.content)
        except OSError as e:
            raise DownloadError(url, str(path), str(e)) from e

        logger.debug(f"Downloaded {result.bytes_written} bytes to {result.path}")
        return str(path)

    async def download_asset(self, asset: ResolvedAsset, target_dir: str | Path) -> AssetOutcome:
        """Download one resolved asset and describe what happened.

        An asset without a URL is reported as unresolved without any I/O.
        Any failure, including a closed HTTP client, becomes a failed outcome
        for this asset alone.
        """
        request = asset.request
        if not asset.remote_url:
            return AssetOutcome(request=request, status=AssetStatus.UNRESOLVED)

        try:
            path = await self.download(request.file_name, target_dir, asset.remote_url)
        except DownloadError as e:
            logger.warning(str(e))
            return self._failed(asset, e.reason)
        except Exception as e:
            logger.warning(f"Failed to download {asset.remote_url}: {type(e).__name__}: {e}")
            return self._failed(asset, f"{type(e).__name__}: {e}")

        return AssetOutcome(
            request=request,
            status=AssetStatus.DOWNLOADED,
            path=path,
            remote_url=asset.remote_url,
        )

    @staticmethod
    def _failed(asset: ResolvedAsset, reason: str) -> AssetOutcome:
        return AssetOutcome(
            request=asset.request,
            status=AssetStatus.FAILED,
            remote_url=asset.remote_url,
            error=reason,
        )

"""Models for the remote asset resolution pipeline."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

ImageFormat = Literal["png", "svg"]

# Local path on success, "" when the image was not resolved or not downloaded
DownloadOutcome = str


class AssetKind(str, Enum):
    """Which remote source an image comes from."""

    RENDER = "render"  # on-demand export of a node
    FILL = "fill"  # bitmap already embedded in the file


class AssetStatus(str, Enum):
    """Per-request result of a resolution call."""

    DOWNLOADED = "downloaded"
    UNRESOLVED = "unresolved"  # no URL for the reference
    FAILED = "failed"  # URL known, download failed


class ImageRequest(BaseModel):
    """One image the caller wants on disk.

    Fill requests carry the fill reference and no format; render requests
    carry a format and no fill reference.

    Example:
        >>> ImageRequest.render("1:2", "logo.svg", "svg")
        >>> ImageRequest.fill("1:3", "bg.png", "ref-bg")
        >>> ImageRequest.from_file_name("1:2", "logo.svg").format
        'svg'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    node_id: str = Field(min_length=1)
    file_name: str = Field(min_length=1)
    asset_kind: AssetKind
    format: ImageFormat | None = None
    fill_ref: str | None = None

    @model_validator(mode="after")
    def _check_kind_fields(self) -> Self:
        if self.asset_kind is AssetKind.FILL:
            if not self.fill_ref:
                raise ValueError("fill requests require fill_ref")
            if self.format is not None:
                raise ValueError("fill requests must not set format")
        else:
            if self.format is None:
                raise ValueError("render requests require format")
            if self.fill_ref is not None:
                raise ValueError("render requests must not set fill_ref")
        return self

    @classmethod
    def fill(cls, node_id: str, file_name: str, fill_ref: str) -> ImageRequest:
        return cls(node_id=node_id, file_name=file_name, asset_kind=AssetKind.FILL, fill_ref=fill_ref)

    @classmethod
    def render(cls, node_id: str, file_name: str, format: ImageFormat = "png") -> ImageRequest:
        return cls(node_id=node_id, file_name=file_name, asset_kind=AssetKind.RENDER, format=format)

    @classmethod
    def from_file_name(
        cls, node_id: str, file_name: str, image_ref: str | None = None
    ) -> ImageRequest:
        """Build a request the way a tool caller describes it.

        An image ref makes it a fill request. Otherwise it is a render
        request whose format follows the file extension: ``.svg`` renders
        as svg, anything else as png.
        """
        if image_ref:
            return cls.fill(node_id, file_name, image_ref)
        fmt: ImageFormat = "svg" if PurePath(file_name).suffix.lower() == ".svg" else "png"
        return cls.render(node_id, file_name, fmt)

    @property
    def is_fill(self) -> bool:
        return self.asset_kind is AssetKind.FILL


class ResolvedAsset(BaseModel):
    """A request paired with the URL the remote reported for it.

    ``remote_url`` is None when the remote map had no entry (or a null one).
    """

    model_config = ConfigDict(frozen=True)

    request: ImageRequest
    remote_url: str | None = None

    @property
    def is_resolved(self) -> bool:
        return bool(self.remote_url)


class AssetOutcome(BaseModel):
    """Diagnostic result for one request."""

    model_config = ConfigDict(frozen=True)

    request: ImageRequest
    status: AssetStatus
    path: str = ""
    remote_url: str | None = None
    error: str | None = None

    def collapse(self) -> DownloadOutcome:
        """Plain outcome: the local path, or "" for anything but a download."""
        return self.path if self.status is AssetStatus.DOWNLOADED else ""

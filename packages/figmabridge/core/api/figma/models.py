"""Response models for the Figma REST endpoints used by figmabridge.

Only the fields the pipeline reads are modelled; everything else is kept
through ``extra="allow"`` or ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImageFillsMeta(BaseModel):
    """``meta`` block of ``GET /files/{key}/images``."""

    model_config = ConfigDict(extra="ignore")

    images: dict[str, str] = Field(
        default_factory=dict, description="Fill reference -> download URL"
    )


class ImageFillsResponse(BaseModel):
    """Response of ``GET /files/{key}/images``.

    A payload without ``meta`` or without ``meta.images`` parses to an empty
    mapping.
    """

    model_config = ConfigDict(extra="ignore")

    error: bool = False
    status: int | None = None
    meta: ImageFillsMeta = Field(default_factory=ImageFillsMeta)

    @property
    def images(self) -> dict[str, str]:
        return self.meta.images


class ImagesResponse(BaseModel):
    """Response of ``GET /images/{key}`` (rendered exports).

    Figma reports a node it could not render as ``null``.
    """

    model_config = ConfigDict(extra="ignore")

    err: str | None = None
    images: dict[str, str | None] = Field(default_factory=dict)


class FileResponse(BaseModel):
    """Response of ``GET /files/{key}``."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    last_modified: str | None = Field(default=None, alias="lastModified")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    document: dict[str, Any] = Field(default_factory=dict)


class NodeEntry(BaseModel):
    """One entry of the ``nodes`` map returned by ``GET /files/{key}/nodes``."""

    model_config = ConfigDict(extra="allow")

    document: dict[str, Any] | None = None


class FileNodesResponse(BaseModel):
    """Response of ``GET /files/{key}/nodes``."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    last_modified: str | None = Field(default=None, alias="lastModified")
    thumbnail_url: str | None = Field(default=None, alias="thumbnailUrl")
    nodes: dict[str, NodeEntry | None] = Field(default_factory=dict)

"""Simplified design tree models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from figmabridge.core.assets.models import ImageRequest
from figmabridge.core.io import sanitize_path_component


class SimplifiedNode(BaseModel):
    """A visible node with the few fields downstream tools read."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    type: str = ""
    text: str | None = None
    image_ref: str | None = None
    children: list[SimplifiedNode] = Field(default_factory=list)


class ImageNode(BaseModel):
    """A node painted with an image fill."""

    model_config = ConfigDict(frozen=True)

    node_id: str
    name: str = ""
    image_ref: str


class SimplifiedDesign(BaseModel):
    """Result of simplifying a file or node payload."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    last_modified: str | None = None
    thumbnail_url: str | None = None
    nodes: list[SimplifiedNode] = Field(default_factory=list)
    image_nodes: list[ImageNode] = Field(default_factory=list)

    def fill_requests(self, extension: str = "png") -> list[ImageRequest]:
        """One fill request per image node, named after the node id."""
        return [
            ImageRequest.fill(
                node.node_id,
                f"{sanitize_path_component(node.node_id)}.{extension}",
                node.image_ref,
            )
            for node in self.image_nodes
        ]

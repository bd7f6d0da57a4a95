"""Raw Figma payload -> SimplifiedDesign."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from figmabridge.core.api.figma.models import FileNodesResponse, FileResponse

from .models import ImageNode, SimplifiedDesign, SimplifiedNode


def _image_ref(node: Mapping[str, Any]) -> str | None:
    for paint in node.get("fills") or []:
        if not isinstance(paint, Mapping) or paint.get("visible") is False:
            continue
        if paint.get("type") == "IMAGE" and paint.get("imageRef"):
            return str(paint["imageRef"])
    return None


def _simplify_node(node: Mapping[str, Any], image_nodes: list[ImageNode]) -> SimplifiedNode | None:
    if node.get("visible") is False:
        return None

    node_id = str(node.get("id", ""))
    name = str(node.get("name", ""))
    image_ref = _image_ref(node)
    if image_ref:
        image_nodes.append(ImageNode(node_id=node_id, name=name, image_ref=image_ref))

    children = []
    for child in node.get("children") or []:
        simplified = _simplify_node(child, image_nodes)
        if simplified is not None:
            children.append(simplified)

    node_type = str(node.get("type", ""))
    return SimplifiedNode(
        id=node_id,
        name=name,
        type=node_type,
        text=node.get("characters") if node_type == "TEXT" else None,
        image_ref=image_ref,
        children=children,
    )


def simplify_design(raw: Mapping[str, Any] | BaseModel) -> SimplifiedDesign:
    """Simplify a ``GET /files/{key}`` or ``GET /files/{key}/nodes`` payload.

    Invisible nodes (and their subtrees) are skipped. Every visible node with
    a visible IMAGE fill is also listed in ``image_nodes``, in tree order.

    Raises:
        ValueError: If the payload has neither ``document`` nor ``nodes``
        ValidationError: If the payload fields have the wrong shape
    """
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)

    image_nodes: list[ImageNode] = []
    roots: list[Mapping[str, Any]]

    if "document" in raw:
        file = FileResponse.model_validate(raw)
        meta: FileResponse | FileNodesResponse = file
        roots = [file.document]
    elif "nodes" in raw:
        nodes = FileNodesResponse.model_validate(raw)
        meta = nodes
        roots = [entry.document for entry in nodes.nodes.values() if entry and entry.document]
    else:
        raise ValueError("Unrecognized Figma payload: expected 'document' or 'nodes'")

    simplified = [_simplify_node(root, image_nodes) for root in roots]

    return SimplifiedDesign(
        name=meta.name,
        last_modified=meta.last_modified,
        thumbnail_url=meta.thumbnail_url,
        nodes=[n for n in simplified if n is not None],
        image_nodes=image_nodes,
    )

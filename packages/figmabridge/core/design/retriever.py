"""Fetches design trees and hands them to the simplifier."""

from __future__ import annotations

import logging
from typing import Any

from figmabridge.core.api.figma.client import RemoteClient
from figmabridge.core.logging import NullPayloadDumper, PayloadDumper

from .models import SimplifiedDesign
from .simplify import simplify_design

logger = logging.getLogger(__name__)

RAW_DUMP_NAME = "figma-raw.yml"
SIMPLIFIED_DUMP_NAME = "figma-simplified.yml"


class TreeRetriever:
    """Retrieves a whole file or a node subtree as a SimplifiedDesign.

    Errors from the client or the simplifier are logged and re-raised.
    Payload dumps go to ``dumper`` and never affect the result.
    """

    def __init__(self, client: RemoteClient, dumper: PayloadDumper | None = None):
        self.client = client
        self.dumper: PayloadDumper = dumper or NullPayloadDumper()

    async def get_file(self, file_id: str, depth: int | None = None) -> SimplifiedDesign:
        params = {"depth": depth} if depth else None
        logger.info(f"Retrieving Figma file: {file_id} (depth: {depth or 'default'})")
        return await self._retrieve(f"/files/{file_id}", params, f"file {file_id}")

    async def get_node(
        self, file_id: str, node_id: str, depth: int | None = None
    ) -> SimplifiedDesign:
        params: dict[str, Any] = {"ids": node_id}
        if depth:
            params["depth"] = depth
        logger.info(f"Retrieving Figma node: {node_id} from {file_id} (depth: {depth or 'default'})")
        return await self._retrieve(f"/files/{file_id}/nodes", params, f"node {node_id}")

    async def _retrieve(
        self, endpoint: str, params: dict[str, Any] | None, label: str
    ) -> SimplifiedDesign:
        try:
            raw = await self.client.request(endpoint, dict[str, Any], params=params)
            await self.dumper.dump(RAW_DUMP_NAME, raw)
            design = simplify_design(raw)
        except Exception as e:
            logger.error(f"Failed to get {label}: {e}")
            raise

        await self.dumper.dump(SIMPLIFIED_DUMP_NAME, design)
        return design

"""YAML payload dumps for human-readable debugging output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from figmabridge.core.io import FileSystem, RealFileSystem

logger = logging.getLogger(__name__)


def to_plain(payload: Any) -> Any:
    """Convert pydantic models (recursively) to plain YAML-safe data."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(payload, dict):
        return {str(k): to_plain(v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [to_plain(v) for v in payload]
    return payload


class YAMLPayloadDumper:
    """Writes each payload as a YAML document into ``dump_dir``.

    A later dump with the same name replaces the earlier one.

    Example:
        >>> dumper = YAMLPayloadDumper(Path("logs"))
        >>> await dumper.dump("figma-raw.yml", raw)
    """

    def __init__(self, dump_dir: Path | str, fs: FileSystem | None = None):
        self.dump_dir = Path(dump_dir)
        self.fs: FileSystem = fs or RealFileSystem()

    async def dump(self, name: str, payload: Any) -> None:
        path = self.dump_dir / name
        try:
            text = yaml.safe_dump(
                to_plain(payload),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
            await self.fs.write_text(path, text)
        except Exception as e:
            # Dumps must never fail the caller
            logger.debug(f"Failed to write payload dump {path}: {e}")
            return

        logger.debug(f"Wrote payload dump {path}")


class NullPayloadDumper:
    """Dump sink that discards everything (production and CLI modes)."""

    async def dump(self, name: str, payload: Any) -> None:
        return None

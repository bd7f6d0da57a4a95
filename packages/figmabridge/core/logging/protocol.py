"""Protocol for payload dump sinks."""

from typing import Any, Protocol


class PayloadDumper(Protocol):
    """Sink for intermediate payloads written while debugging.

    Dumping is best-effort: implementations must never raise, so a broken
    sink cannot fail the operation that produced the payload.
    """

    async def dump(self, name: str, payload: Any) -> None:
        """Persist ``payload`` under ``name`` (e.g. "figma-raw.yml")."""
        ...

"""Models for filesystem abstraction layer."""

from pathlib import Path
from typing import TypeAlias

from pydantic import BaseModel, Field

PathLike: TypeAlias = str | Path


class WriteResult(BaseModel):
    """Result of a filesystem write operation.

    Attributes:
        path: Final path written
        bytes_written: Number of bytes written
        duration_ms: Operation duration in milliseconds
    """

    path: str = Field(description="Final path written")
    bytes_written: int = Field(description="Number of bytes written", ge=0)
    duration_ms: float = Field(description="Operation duration in milliseconds", ge=0.0)

"""Filesystem abstraction layer for figmabridge.

Provides safe, testable, async filesystem operations.

Example:
    >>> from figmabridge.core.io import RealFileSystem
    >>> fs = RealFileSystem()
    >>> await fs.write_bytes("images/logo.png", data)
    >>> content = await fs.read_bytes("images/logo.png")
"""

from .impl_fake import FakeFileSystem
from .impl_real import RealFileSystem
from .models import PathLike, WriteResult
from .protocols import FileSystem
from .utils import sanitize_path_component

__all__ = [
    "PathLike",
    "WriteResult",
    "FileSystem",
    "RealFileSystem",
    "FakeFileSystem",
    "sanitize_path_component",
]

"""Protocol for async filesystem operations."""

from typing import Protocol

from .models import PathLike, WriteResult


class FileSystem(Protocol):
    """
    Protocol for async filesystem operations.

    Implementations must provide atomic write semantics: readers never
    observe a partially written file.
    """

    async def exists(self, path: PathLike) -> bool:
        """Check if path exists (file or directory)."""
        ...

    async def is_file(self, path: PathLike) -> bool:
        """Check if path exists and is a file."""
        ...

    async def is_dir(self, path: PathLike) -> bool:
        """Check if path exists and is a directory."""
        ...

    async def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        """
        Read text file contents.

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        ...

    async def read_bytes(self, path: PathLike) -> bytes:
        """
        Read binary file contents.

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        ...

    async def write_text(
        self,
        path: PathLike,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """
        Atomically write text to file, creating parent directories.

        Raises:
            OSError: On write failure
        """
        ...

    async def write_bytes(self, path: PathLike, content: bytes) -> WriteResult:
        """
        Atomically write bytes to file, creating parent directories.

        Raises:
            OSError: On write failure
        """
        ...

    async def mkdirs(self, path: PathLike, exist_ok: bool = True) -> None:
        """
        Create directory and all parents.

        Raises:
            OSError: On creation failure
        """
        ...

    async def listdir(self, path: PathLike) -> list[str]:
        """
        List directory contents (names only).

        Raises:
            FileNotFoundError: If directory doesn't exist
        """
        ...

    async def remove(self, path: PathLike) -> None:
        """
        Remove file.

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        ...

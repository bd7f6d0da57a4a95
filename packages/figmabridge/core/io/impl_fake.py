"""In-memory filesystem for fast, isolated testing.

Simulates filesystem operations without disk I/O.
Async operations complete immediately but maintain async interface.
"""

from pathlib import Path

from .models import PathLike, WriteResult


class FakeFileSystem:
    """
    In-memory async filesystem for testing.

    Files are stored as bytes keyed by their normalized path string.
    Not thread-safe (use per-test instance).

    Args:
        fail_on: Paths whose writes raise ``OSError`` (simulates a full or
            read-only disk for a single file)
        read_only: Every write raises ``OSError``
    """

    def __init__(self, fail_on: set[str] | None = None, read_only: bool = False) -> None:
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = {"/", "."}
        self._fail_on = {str(Path(p)) for p in (fail_on or set())}
        self._read_only = read_only
        self.write_log: list[str] = []

    @staticmethod
    def _key(path: PathLike) -> str:
        return str(Path(path))

    async def exists(self, path: PathLike) -> bool:
        """Check existence (async, immediate)."""
        key = self._key(path)
        return key in self._files or key in self._dirs

    async def is_file(self, path: PathLike) -> bool:
        """Check if file (async, immediate)."""
        return self._key(path) in self._files

    async def is_dir(self, path: PathLike) -> bool:
        """Check if directory (async, immediate)."""
        return self._key(path) in self._dirs

    async def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        """Read text (async, immediate)."""
        return (await self.read_bytes(path)).decode(encoding)

    async def read_bytes(self, path: PathLike) -> bytes:
        """Read bytes (async, immediate)."""
        key = self._key(path)
        if key not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        return self._files[key]

    async def write_text(
        self,
        path: PathLike,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Write text (async, immediate)."""
        return await self.write_bytes(path, content.encode(encoding))

    async def write_bytes(self, path: PathLike, content: bytes) -> WriteResult:
        """Write bytes (async, immediate)."""
        key = self._key(path)
        if self._read_only or key in self._fail_on:
            raise OSError(f"Write refused: {path}")

        self._ensure_parents(Path(path).parent)
        self._files[key] = content
        self.write_log.append(key)

        return WriteResult(path=key, bytes_written=len(content), duration_ms=0.0)

    def _ensure_parents(self, path: Path) -> None:
        """Recursively create parent directories (sync helper)."""
        parts = path.parts
        for i in range(1, len(parts) + 1):
            self._dirs.add(str(Path(*parts[:i])))

    async def mkdirs(self, path: PathLike, exist_ok: bool = True) -> None:
        """Create directory (async, immediate)."""
        key = self._key(path)
        if self._read_only:
            raise OSError(f"Read-only filesystem: {path}")
        if not exist_ok and key in self._dirs:
            raise FileExistsError(f"Directory exists: {path}")
        self._ensure_parents(Path(path))

    async def listdir(self, path: PathLike) -> list[str]:
        """List directory (async, immediate)."""
        key = self._key(path)
        if key not in self._dirs:
            raise FileNotFoundError(f"Directory not found: {path}")

        parent = Path(key)
        children = {Path(p).name for p in self._files if Path(p).parent == parent}
        children |= {Path(p).name for p in self._dirs if p != key and Path(p).parent == parent}
        return sorted(children)

    async def remove(self, path: PathLike) -> None:
        """Remove file (async, immediate)."""
        key = self._key(path)
        if key not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        del self._files[key]

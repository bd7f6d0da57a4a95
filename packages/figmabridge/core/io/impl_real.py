"""Real filesystem implementation using aiofiles for async I/O.

Provides atomic writes via temp file + os.replace().
"""

import asyncio
import os
import time
from pathlib import Path
from tempfile import NamedTemporaryFile

import aiofiles  # type: ignore[import-untyped]
import aiofiles.os  # type: ignore[import-untyped]

from .models import PathLike, WriteResult


class RealFileSystem:
    """
    Real filesystem implementation using aiofiles for async I/O.

    Provides atomic writes via temp file + os.replace().
    """

    async def exists(self, path: PathLike) -> bool:
        """Check existence asynchronously."""
        return bool(await aiofiles.os.path.exists(path))

    async def is_file(self, path: PathLike) -> bool:
        """Check if file asynchronously."""
        return bool(await aiofiles.os.path.isfile(path))

    async def is_dir(self, path: PathLike) -> bool:
        """Check if directory asynchronously."""
        return bool(await aiofiles.os.path.isdir(path))

    async def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        """Read text file asynchronously."""
        async with aiofiles.open(path, encoding=encoding) as f:
            content: str = await f.read()
            return content

    async def read_bytes(self, path: PathLike) -> bytes:
        """Read binary file asynchronously."""
        async with aiofiles.open(path, mode="rb") as f:
            content: bytes = await f.read()
            return content

    async def write_text(
        self,
        path: PathLike,
        content: str,
        encoding: str = "utf-8",
    ) -> WriteResult:
        """Atomically write text file asynchronously."""
        return await self._atomic_write(path, content.encode(encoding))

    async def write_bytes(self, path: PathLike, content: bytes) -> WriteResult:
        """Atomically write binary file asynchronously."""
        return await self._atomic_write(path, content)

    async def _atomic_write(self, path: PathLike, data: bytes) -> WriteResult:
        """Write ``data`` to a temp file next to ``path`` then replace."""
        start = time.perf_counter()
        path_obj = Path(path)

        await aiofiles.os.makedirs(path_obj.parent, exist_ok=True)

        # Temp file in the same directory so os.replace stays atomic
        loop = asyncio.get_running_loop()

        def create_temp_file() -> str:
            tmp = NamedTemporaryFile(mode="wb", dir=path_obj.parent, delete=False)
            tmp_path = tmp.name
            tmp.close()
            return tmp_path

        tmp_path = await loop.run_in_executor(None, create_temp_file)

        try:
            async with aiofiles.open(tmp_path, mode="wb") as f:
                await f.write(data)

            await loop.run_in_executor(None, os.replace, tmp_path, str(path_obj))
        except Exception:
            try:
                await aiofiles.os.unlink(tmp_path)
            except OSError:
                pass
            raise

        return WriteResult(
            path=str(path_obj),
            bytes_written=len(data),
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    async def mkdirs(self, path: PathLike, exist_ok: bool = True) -> None:
        """Create directory and parents asynchronously."""
        await aiofiles.os.makedirs(path, exist_ok=exist_ok)

    async def listdir(self, path: PathLike) -> list[str]:
        """List directory contents asynchronously."""
        entries: list[str] = await aiofiles.os.listdir(path)
        return entries

    async def remove(self, path: PathLike) -> None:
        """Remove file asynchronously."""
        await aiofiles.os.unlink(path)

"""Tests for RealFileSystem against a temporary directory."""

from pathlib import Path

import pytest

from figmabridge.core.io import RealFileSystem


@pytest.fixture
def fs():
    return RealFileSystem()


async def test_write_bytes_creates_parents(fs: RealFileSystem, tmp_path: Path):
    target = tmp_path / "images" / "icons" / "a.svg"

    result = await fs.write_bytes(target, b"<svg/>")

    assert target.read_bytes() == b"<svg/>"
    assert result.bytes_written == 6
    assert result.path == str(target)


async def test_write_leaves_no_temp_files(fs: RealFileSystem, tmp_path: Path):
    await fs.write_text(tmp_path / "a.yml", "a: 1\n")
    await fs.write_text(tmp_path / "a.yml", "a: 2\n")

    assert await fs.listdir(tmp_path) == ["a.yml"]
    assert await fs.read_text(tmp_path / "a.yml") == "a: 2\n"


async def test_exists_and_remove(fs: RealFileSystem, tmp_path: Path):
    target = tmp_path / "x.png"
    await fs.write_bytes(target, b"x")

    assert await fs.is_file(target)
    assert await fs.is_dir(tmp_path)

    await fs.remove(target)
    assert not await fs.exists(target)


async def test_read_missing_raises(fs: RealFileSystem, tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        await fs.read_bytes(tmp_path / "missing.png")

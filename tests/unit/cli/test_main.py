"""Unit tests for the figmabridge CLI."""

from __future__ import annotations

import argparse
from functools import partial

import httpx
import pytest

from figmabridge.cli import main as cli
from figmabridge.core.assets import AssetKind
from figmabridge.core.config.loader import ENV_API_KEY, ENV_MODE, ENV_OUTPUT_DIR
from figmabridge.core.io import FakeFileSystem
from figmabridge.core.session import FigmaSession


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory with a clean environment and no logging setup."""
    monkeypatch.chdir(tmp_path)
    for name in (ENV_API_KEY, ENV_MODE, ENV_OUTPUT_DIR):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "configure_logging_from_config", lambda config: None)


def figma_api(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/v1/files/ABC123/images":
        return httpx.Response(200, json={"meta": {"images": {"ref-bg": "https://cdn.test/bg.png"}}})
    if path == "/v1/images/ABC123":
        fmt = request.url.params["format"]
        url = "https://cdn.test/icon.svg" if fmt == "svg" else None
        return httpx.Response(200, json={"images": {request.url.params["ids"]: url}})
    if path == "/v1/files/ABC123":
        return httpx.Response(
            200,
            json={"name": "Landing", "document": {"id": "0:0", "name": "Document", "type": "DOCUMENT"}},
        )
    return httpx.Response(404)


def cdn(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=b"image-bytes")


@pytest.fixture
def fake_fs(monkeypatch) -> FakeFileSystem:
    fs = FakeFileSystem()
    monkeypatch.setattr(
        cli,
        "FigmaSession",
        partial(
            FigmaSession,
            fs=fs,
            transport=httpx.MockTransport(figma_api),
            download_transport=httpx.MockTransport(cdn),
        ),
    )
    return fs


class TestParseNodeSpec:
    def test_render_svg(self):
        request = cli.parse_node_spec("12:34=logo.svg")
        assert request.node_id == "12:34"
        assert request.format == "svg"

    def test_fill(self):
        request = cli.parse_node_spec("12:35=bg.png=ref-bg")
        assert request.asset_kind is AssetKind.FILL
        assert request.fill_ref == "ref-bg"

    @pytest.mark.parametrize("spec", ["12:34", "12:34=", "=a.png", "a=b=c=d"])
    def test_invalid(self, spec):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_node_spec(spec)


class TestArgParser:
    def test_images_command(self):
        args = cli.build_arg_parser().parse_args(
            ["--mode", "cli", "images", "ABC123", "--node", "1:1=a.png", "--node", "1:2=b.svg"]
        )
        assert args.cmd == "images"
        assert [r.node_id for r in args.node] == ["1:1", "1:2"]
        assert args.out is None

    def test_node_required_for_images(self):
        with pytest.raises(SystemExit):
            cli.build_arg_parser().parse_args(["images", "ABC123"])


class TestRun:
    def test_missing_api_key(self, capsys):
        args = cli.build_arg_parser().parse_args(["file", "ABC123"])

        assert cli.run(args) == 1
        assert "Figma API key is required" in capsys.readouterr().out

    def test_missing_config_file(self, capsys):
        args = cli.build_arg_parser().parse_args(["--config", "nope.yaml", "file", "ABC123"])

        assert cli.run(args) == 1
        assert "Could not load config" in capsys.readouterr().out

    def test_api_key_from_dotenv(self, tmp_path, monkeypatch, fake_fs, capsys):
        (tmp_path / ".env").write_text(f"{ENV_API_KEY}=figd_dotenv\n")
        # Undo what load_dotenv writes into os.environ
        monkeypatch.setenv(ENV_API_KEY, "")
        monkeypatch.delenv(ENV_API_KEY)
        args = cli.build_arg_parser().parse_args(["file", "ABC123"])

        assert cli.run(args) == 0
        assert "name: Landing" in capsys.readouterr().out

    def test_images_downloads(self, fake_fs, capsys):
        args = cli.build_arg_parser().parse_args(
            [
                "--figma-api-key",
                "figd_test",
                "images",
                "ABC123",
                "--out",
                "out",
                "--node",
                "1:1=bg.png=ref-bg",
                "--node",
                "2:2=icon.svg",
            ]
        )

        assert cli.run(args) == 0
        assert "2 images downloaded" in capsys.readouterr().out
        assert sorted(fake_fs.write_log) == ["out/bg.png", "out/icon.svg"]

    def test_images_missing_render_exits_1(self, fake_fs, capsys):
        args = cli.build_arg_parser().parse_args(
            ["--figma-api-key", "figd_test", "images", "ABC123", "--node", "3:3=hero.png"]
        )

        assert cli.run(args) == 1
        out = capsys.readouterr().out
        assert "0 images downloaded" in out
        assert "unresolved" in out

    def test_remote_error_exits_1(self, fake_fs, capsys):
        args = cli.build_arg_parser().parse_args(
            ["--figma-api-key", "figd_test", "node", "MISSING", "1:1"]
        )

        assert cli.run(args) == 1
        assert "Figma API error 404" in capsys.readouterr().out

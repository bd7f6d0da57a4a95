"""Tests for FillResolver."""

import pytest

from figmabridge.core.api.figma import FigmaApiError
from figmabridge.core.assets import AssetStatus, FillResolver, ImageRequest


def fills_endpoint(mapping):
    def handler(endpoint, params):
        assert endpoint == "/files/ABC123/images"
        return {"error": False, "status": 200, "meta": {"images": mapping}}

    return handler


class TestResolveFills:
    async def test_scenario_single_fill(self, scripted_client, downloader, image_server, fs):
        image_server.images["http://x/img.png"] = b"IMG"
        client = scripted_client(fills_endpoint({"ref-1": "http://x/img.png"}))
        resolver = FillResolver(client, downloader)

        result = await resolver.resolve_fills(
            "ABC123", [ImageRequest.fill("1:1", "bg.png", "ref-1")], "local"
        )

        assert result == ["local/bg.png"]
        assert image_server.requested == ["http://x/img.png"]
        assert await fs.read_bytes("local/bg.png") == b"IMG"

    async def test_empty_input_makes_no_call(self, scripted_client, downloader):
        client = scripted_client(fills_endpoint({}))
        resolver = FillResolver(client, downloader)

        assert await resolver.resolve_fills("ABC123", [], "local") == []
        assert client.calls == []

    async def test_unmatched_keep_slot_and_order(self, scripted_client, downloader, image_server):
        image_server.images.update({"http://x/a.png": b"a", "http://x/c.png": b"c"})
        client = scripted_client(fills_endpoint({"ref-a": "http://x/a.png", "ref-c": "http://x/c.png"}))
        resolver = FillResolver(client, downloader)
        requests = [
            ImageRequest.fill("1:1", "a.png", "ref-a"),
            ImageRequest.fill("1:2", "b.png", "ref-b"),
            ImageRequest.fill("1:3", "c.png", "ref-c"),
            ImageRequest.fill("1:4", "d.png", "ref-d"),
        ]

        result = await resolver.resolve_fills("ABC123", requests, "out")

        assert result == ["out/a.png", "", "out/c.png", ""]
        assert len(client.calls) == 1

    async def test_missing_meta_resolves_nothing(self, scripted_client, downloader, image_server):
        client = scripted_client(lambda endpoint, params: {"error": False, "status": 200})
        resolver = FillResolver(client, downloader)

        result = await resolver.resolve_fills(
            "ABC123", [ImageRequest.fill("1:1", "bg.png", "ref-1")], "out"
        )

        assert result == [""]
        assert image_server.requested == []

    async def test_failed_download_only_affects_its_slot(
        self, scripted_client, downloader, image_server
    ):
        image_server.images["http://x/ok.png"] = b"ok"
        image_server.broken.add("http://x/broken.png")
        client = scripted_client(
            fills_endpoint({"ref-ok": "http://x/ok.png", "ref-broken": "http://x/broken.png"})
        )
        resolver = FillResolver(client, downloader)
        requests = [
            ImageRequest.fill("1:1", "broken.png", "ref-broken"),
            ImageRequest.fill("1:2", "ok.png", "ref-ok"),
        ]

        assert await resolver.resolve_fills("ABC123", requests, "out") == ["", "out/ok.png"]

    async def test_malformed_url_only_affects_its_slot(
        self, scripted_client, downloader, image_server, fs
    ):
        image_server.images["http://x/ok.png"] = b"ok"
        client = scripted_client(
            fills_endpoint({"ref-1": "http://x/\x01bad.png", "ref-2": "http://x/ok.png"})
        )
        resolver = FillResolver(client, downloader)
        requests = [
            ImageRequest.fill("1:1", "bad.png", "ref-1"),
            ImageRequest.fill("1:2", "ok.png", "ref-2"),
        ]

        assert await resolver.resolve_fills("ABC123", requests, "local") == ["", "local/ok.png"]
        assert await fs.read_bytes("local/ok.png") == b"ok"

    async def test_closed_download_client_empties_slot(
        self, scripted_client, downloader, download_client, image_server
    ):
        image_server.images["http://x/img.png"] = b"IMG"
        await download_client.aclose()
        client = scripted_client(fills_endpoint({"ref-1": "http://x/img.png"}))
        resolver = FillResolver(client, downloader)

        result = await resolver.resolve_fills(
            "ABC123", [ImageRequest.fill("1:1", "bg.png", "ref-1")], "local"
        )

        assert result == [""]

    async def test_mapping_error_propagates(self, scripted_client, downloader):
        def handler(endpoint, params):
            raise FigmaApiError(403, "Forbidden")

        resolver = FillResolver(scripted_client(handler), downloader)

        with pytest.raises(FigmaApiError) as exc_info:
            await resolver.resolve_fills(
                "ABC123", [ImageRequest.fill("1:1", "bg.png", "ref-1")], "out"
            )
        assert exc_info.value.status == 403

    async def test_idempotent(self, scripted_client, downloader, image_server):
        image_server.images["http://x/img.png"] = b"IMG"
        client = scripted_client(fills_endpoint({"ref-1": "http://x/img.png"}))
        resolver = FillResolver(client, downloader)
        requests = [
            ImageRequest.fill("1:1", "bg.png", "ref-1"),
            ImageRequest.fill("1:2", "x.png", "ref-x"),
        ]

        first = await resolver.resolve_fills("ABC123", requests, "out")
        second = await resolver.resolve_fills("ABC123", requests, "out")

        assert first == second == ["out/bg.png", ""]

    async def test_rejects_render_requests(self, scripted_client, downloader):
        client = scripted_client(fills_endpoint({}))
        resolver = FillResolver(client, downloader)

        with pytest.raises(ValueError, match="Not a fill request"):
            await resolver.resolve_fills("ABC123", [ImageRequest.render("2:2", "a.png")], "out")
        assert client.calls == []


class TestResolveFillsDetailed:
    async def test_distinguishes_unresolved_from_failed(
        self, scripted_client, downloader, image_server
    ):
        image_server.images["http://x/ok.png"] = b"ok"
        client = scripted_client(
            fills_endpoint({"ref-ok": "http://x/ok.png", "ref-404": "http://x/404.png"})
        )
        resolver = FillResolver(client, downloader)
        requests = [
            ImageRequest.fill("1:1", "ok.png", "ref-ok"),
            ImageRequest.fill("1:2", "gone.png", "ref-404"),
            ImageRequest.fill("1:3", "none.png", "ref-none"),
        ]

        outcomes = await resolver.resolve_fills_detailed("ABC123", requests, "out")

        assert [o.status for o in outcomes] == [
            AssetStatus.DOWNLOADED,
            AssetStatus.FAILED,
            AssetStatus.UNRESOLVED,
        ]
        assert [o.request for o in outcomes] == requests
        assert outcomes[1].remote_url == "http://x/404.png"

"""Tests for payload dump sinks."""

import yaml

from figmabridge.core.design import SimplifiedDesign, SimplifiedNode
from figmabridge.core.io import FakeFileSystem
from figmabridge.core.logging import NullPayloadDumper, YAMLPayloadDumper, to_plain


async def test_yaml_dump_writes_document():
    fs = FakeFileSystem()
    dumper = YAMLPayloadDumper("logs", fs=fs)

    await dumper.dump("figma-raw.yml", {"name": "Landing", "document": {"id": "0:0"}})

    text = await fs.read_text("logs/figma-raw.yml")
    assert yaml.safe_load(text) == {"name": "Landing", "document": {"id": "0:0"}}


async def test_yaml_dump_of_model():
    fs = FakeFileSystem()
    design = SimplifiedDesign(name="Landing", nodes=[SimplifiedNode(id="1:1", name="Hero")])

    await YAMLPayloadDumper("logs", fs=fs).dump("figma-simplified.yml", design)

    loaded = yaml.safe_load(await fs.read_text("logs/figma-simplified.yml"))
    assert loaded["name"] == "Landing"
    assert loaded["nodes"][0]["id"] == "1:1"


async def test_write_failure_is_swallowed():
    dumper = YAMLPayloadDumper("logs", fs=FakeFileSystem(read_only=True))

    assert await dumper.dump("figma-raw.yml", {"a": 1}) is None


async def test_unserializable_payload_is_swallowed():
    fs = FakeFileSystem()

    await YAMLPayloadDumper("logs", fs=fs).dump("figma-raw.yml", {"obj": object()})

    assert not await fs.exists("logs/figma-raw.yml")


async def test_null_dumper_writes_nothing():
    assert await NullPayloadDumper().dump("figma-raw.yml", {"a": 1}) is None


def test_to_plain_nested():
    node = SimplifiedNode(id="1:1")
    assert to_plain({"nodes": [node], "n": 1}) == {"nodes": [{"id": "1:1", "name": "", "type": "", "children": []}], "n": 1}

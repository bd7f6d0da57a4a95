"""Test suite for figmabridge.

- unit/: Unit tests mirroring ``packages/figmabridge`` (api, assets, design,
  io, config, logging, cli, session)
- conftest.py: Scripted Figma client, mock image server and filesystem fixtures
"""

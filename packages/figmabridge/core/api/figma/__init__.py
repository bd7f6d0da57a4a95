"""Figma REST API access."""

from figmabridge.core.api.figma.client import FigmaClient, RemoteClient
from figmabridge.core.api.figma.errors import FigmaApiError, FigmaError, FigmaTransportError
from figmabridge.core.api.figma.models import (
    FileNodesResponse,
    FileResponse,
    ImageFillsResponse,
    ImagesResponse,
)

__all__ = [
    "FigmaClient",
    "RemoteClient",
    "FigmaError",
    "FigmaApiError",
    "FigmaTransportError",
    "FileResponse",
    "FileNodesResponse",
    "ImageFillsResponse",
    "ImagesResponse",
]

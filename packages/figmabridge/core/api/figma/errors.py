"""Errors raised by the Figma REST client."""

from __future__ import annotations


class FigmaError(RuntimeError):
    """Base class for Figma API failures.

    Attributes:
        status: HTTP status reported by Figma, None when the call never completed
        message: Human-readable description
    """

    status: int | None = None

    def __init__(self, message: str, status: int | None = None) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


class FigmaApiError(FigmaError):
    """Figma answered with a non-success status."""

    status: int

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message or "Unknown error", status=status)

    def __str__(self) -> str:
        return f"Figma API error {self.status}: {self.message}"


class FigmaTransportError(FigmaError):
    """The request could not be completed (network, malformed body, closed client)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status=None)

"""Errors raised by the image pipeline.

Everything a client can trigger derives from ``PlaceholderError`` and is
reported as a generic 400 by the API layer.
"""

from __future__ import annotations


class PlaceholderError(Exception):
    """Base class for request failures surfaced to the client."""

    status_code = 400


class InvalidDimension(PlaceholderError):
    """Size token has no numeric width (only raised in strict size mode)."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid image size: {token!r}")
        self.token = token


class RenderError(PlaceholderError):
    """Resolving, rendering or encoding failed; nothing was cached."""

"""ImageSpec — the validated, normalized rendering intent for one request."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

MAX_LABEL_LENGTH = 200
TRANSPARENT = "transparent"


class ImageFormat(str, enum.Enum):
    SVG = "svg"
    PNG = "png"
    WEBP = "webp"
    JPEG = "jpeg"
    AVIF = "avif"

    @property
    def mime_type(self) -> str:
        return FORMAT_MIME_TYPES[self]

    @property
    def is_vector(self) -> bool:
        return self is ImageFormat.SVG


FORMAT_MIME_TYPES: dict[ImageFormat, str] = {
    ImageFormat.SVG: "image/svg+xml",
    ImageFormat.PNG: "image/png",
    ImageFormat.WEBP: "image/webp",
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.AVIF: "image/avif",
}

# Every spelling accepted as a format keyword, mapped to its canonical format
FORMAT_ALIASES: dict[str, ImageFormat] = {
    "svg": ImageFormat.SVG,
    "png": ImageFormat.PNG,
    "webp": ImageFormat.WEBP,
    "jpeg": ImageFormat.JPEG,
    "jpg": ImageFormat.JPEG,
    "avif": ImageFormat.AVIF,
}


@dataclass(frozen=True)
class SizeLimits:
    """Pixel bounds applied to resolved dimensions."""

    min_size: int = 10
    max_size: int = 4000
    max_scale: float = 4.0


@dataclass(frozen=True)
class RawRequest:
    """Inbound request as split by the routing layer."""

    size_token: str
    positional: tuple[str, ...] = field(default_factory=tuple)
    text: str | None = None
    font: str | None = None


@dataclass(frozen=True)
class ImageSpec:
    width: int
    height: int
    background: str
    text_color: str
    label: str
    font: str
    format: ImageFormat = ImageFormat.SVG

    @property
    def has_transparent_background(self) -> bool:
        return self.background == TRANSPARENT

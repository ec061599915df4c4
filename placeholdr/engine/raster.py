"""Raster stage — per-format encoder settings and the JPEG transparency policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from placeholdr.models.image_spec import ImageFormat, ImageSpec
from placeholdr.utils.rasterizer import encode_image, flatten, svg_to_image

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)


@dataclass(frozen=True)
class RasterOptions:
    dpi: int = 150
    max_supersample_pixels: int = 16_000_000
    png_compress_level: int = 6
    webp_quality: int = 85
    webp_alpha_quality: int = 100
    jpeg_quality: int = 85
    jpeg_progressive: bool = True
    avif_quality: int = 80
    avif_speed: int = 6


def encoder_params(fmt: ImageFormat | str, options: RasterOptions) -> tuple[str, dict[str, Any]]:
    """Pillow format name and save() keyword arguments for ``fmt``.

    Anything that is not webp/jpeg/avif takes the PNG path.
    """
    if fmt == ImageFormat.WEBP:
        return "WEBP", {
            "quality": options.webp_quality,
            "alpha_quality": options.webp_alpha_quality,
            "lossless": False,
        }
    if fmt == ImageFormat.JPEG:
        return "JPEG", {
            "quality": options.jpeg_quality,
            "progressive": options.jpeg_progressive,
        }
    if fmt == ImageFormat.AVIF:
        return "AVIF", {
            "quality": options.avif_quality,
            "speed": options.avif_speed,
        }
    return "PNG", {"compress_level": options.png_compress_level}


def rasterize(
    markup: str,
    fmt: ImageFormat | str,
    spec: ImageSpec,
    options: RasterOptions | None = None,
) -> bytes:
    """Encode ``markup`` as ``fmt`` at ``spec.width``×``spec.height``.

    ``spec.width``/``spec.height`` already include the ``@Nx`` scale; the
    dpi option only drives supersampling.
    """
    options = options or RasterOptions()
    pil_format, params = encoder_params(fmt, options)

    image = svg_to_image(
        markup,
        spec.width,
        spec.height,
        dpi=options.dpi,
        max_pixels=options.max_supersample_pixels,
    )

    if pil_format == "JPEG":
        # No alpha channel in JPEG: composite onto opaque white first
        image = flatten(image, WHITE)

    return encode_image(image, pil_format, **params)

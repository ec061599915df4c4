"""Raster codec — SVG markup to pixels (CairoSVG) and pixels to bytes (Pillow).

This module knows nothing about placeholder semantics; the raster stage in
``placeholdr.engine.raster`` picks the encoder parameters.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Any

import cairosvg
from PIL import Image

logger = logging.getLogger(__name__)

# CSS pixels per inch; CairoSVG renders user units at this density
_CSS_DPI = 96

_CSS_IMPORT_RE = re.compile(
    r"""@import\s+(?:url\(\s*)?(['"]).*?\1\s*\)?\s*;""",
    re.IGNORECASE | re.DOTALL,
)


def strip_css_imports(svg: str) -> str:
    """Drop ``@import`` rules so rasterizing never fetches remote stylesheets."""
    return _CSS_IMPORT_RE.sub("", svg)


def supersample_factor(width: int, height: int, dpi: int, max_pixels: int) -> float:
    """Render scale for ``dpi`` that keeps the canvas within ``max_pixels``."""
    factor = max(1.0, dpi / _CSS_DPI)
    if width * height * factor * factor > max_pixels:
        return 1.0
    return factor


def svg_to_image(
    svg: str,
    width: int,
    height: int,
    dpi: int = _CSS_DPI,
    max_pixels: int = 16_000_000,
) -> Image.Image:
    """Rasterize ``svg`` into an RGBA image of exactly ``width``×``height``.

    When ``dpi`` is above 96 the markup is rendered larger and downsampled,
    which smooths small text. The output size never changes.
    """
    factor = supersample_factor(width, height, dpi, max_pixels)
    render_w = round(width * factor)
    render_h = round(height * factor)

    png_data = cairosvg.svg2png(
        bytestring=strip_css_imports(svg).encode("utf-8"),
        output_width=render_w,
        output_height=render_h,
    )
    image = Image.open(io.BytesIO(png_data)).convert("RGBA")
    if image.size != (width, height):
        image = image.resize((width, height), Image.Resampling.LANCZOS)
    return image


def flatten(image: Image.Image, background: tuple[int, int, int] = (255, 255, 255)) -> Image.Image:
    """Composite ``image`` onto an opaque ``background``; returns RGB."""
    if image.mode != "RGBA":
        return image.convert("RGB")
    base = Image.new("RGB", image.size, background)
    base.paste(image, mask=image.getchannel("A"))
    return base


def encode_image(image: Image.Image, fmt: str, **params: Any) -> bytes:
    """Encode with Pillow's writer for ``fmt`` (PNG, WEBP, JPEG, AVIF)."""
    buf = io.BytesIO()
    image.save(buf, format=fmt, **params)
    data = buf.getvalue()
    logger.debug("Encoded %dx%d %s (%d bytes)", image.width, image.height, fmt, len(data))
    return data

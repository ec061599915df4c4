"""Size token parsing: ``400``, ``600x400``, ``300@2x``, ``600x400.png``."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from placeholdr.engine.errors import InvalidDimension
from placeholdr.engine.resolver.formats import split_extension
from placeholdr.models.image_spec import ImageFormat, SizeLimits
from placeholdr.utils.math_helpers import clamp, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_DIMENSION = 400

_SCALE_RE = re.compile(r"@(\d+(?:\.\d+)?)x?$", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[x×]", re.IGNORECASE)
# Leading integer of a dimension part ("600abc" → 600), like a lenient atoi
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class ParsedSize:
    width: int
    height: int
    scale: float
    # Format named by a ".png"-style suffix on the token, if any
    extension_format: ImageFormat | None = None


def _leading_int(part: str) -> int | None:
    match = _LEADING_INT_RE.match(part)
    if not match:
        return None
    return int(match.group(1))


def parse_scale(token: str, max_scale: float) -> tuple[str, float]:
    """Strip an ``@Nx`` density suffix; scale is clamped to [1, max_scale]."""
    match = _SCALE_RE.search(token)
    if not match:
        return token, 1.0
    scale = float(match.group(1)) or 1.0
    return token[: match.start()], clamp(scale, 1.0, max_scale)


def parse_size(
    token: str | None,
    limits: SizeLimits | None = None,
    strict: bool = False,
) -> ParsedSize:
    """Parse a size token into clamped pixel dimensions.

    A missing height makes the image square. A token with no numeric width
    falls back to 400x400, or raises ``InvalidDimension`` when ``strict``.
    Zero is treated as missing.
    """
    limits = limits or SizeLimits()

    if not token or not isinstance(token, str):
        if strict:
            raise InvalidDimension(str(token))
        return ParsedSize(DEFAULT_DIMENSION, DEFAULT_DIMENSION, 1.0)

    size = token.strip()
    size, extension_format = split_extension(size)
    size, scale = parse_scale(size, limits.max_scale)

    parts = [_leading_int(p) for p in _SEPARATOR_RE.split(size)]
    width = parts[0] if parts else None
    height = parts[1] if len(parts) > 1 else None

    if not width:
        if strict:
            raise InvalidDimension(token)
        logger.debug("No numeric width in %r, using %d", token, DEFAULT_DIMENSION)
        width = DEFAULT_DIMENSION
    if not height:
        height = width

    # Scale is >= 1, so capping first cannot change the clamped result
    width = min(width, limits.max_size)
    height = min(height, limits.max_size)

    return ParsedSize(
        width=int(clamp(round_half_up(width * scale), limits.min_size, limits.max_size)),
        height=int(clamp(round_half_up(height * scale), limits.min_size, limits.max_size)),
        scale=scale,
        extension_format=extension_format,
    )

"""Positional ladder — assigns optional path segments to color/format roles.

Each segment is either a format keyword or a color. Segments are examined
left to right:

    p2: format keyword → format, stop;  otherwise → background color
    p3: format keyword → format, stop;  otherwise → text color
    p4: always a format

The format-keyword test always wins, so a color literally spelled "png"
can never be a color value.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from placeholdr.engine.resolver.formats import is_format_keyword, parse_format
from placeholdr.models.image_spec import ImageFormat

# Roles filled by non-format segments, in order
COLOR_SLOTS = ("background", "text_color")


@dataclass(frozen=True)
class FormatToken:
    format: ImageFormat


@dataclass(frozen=True)
class ColorToken:
    value: str


PositionalToken = FormatToken | ColorToken


@dataclass(frozen=True)
class PositionalRoles:
    """Raw (un-normalized) colors and the format chosen by the ladder."""

    background: str | None = None
    text_color: str | None = None
    format: ImageFormat | None = None


def classify_token(token: str, color_allowed: bool = True) -> PositionalToken:
    """Type one segment. With ``color_allowed=False`` it is always a format."""
    if not color_allowed or is_format_keyword(token):
        return FormatToken(parse_format(token))
    return ColorToken(token)


def disambiguate(positional: Sequence[str | None]) -> PositionalRoles:
    colors: dict[str, str] = {}
    fmt: ImageFormat | None = None

    for index, token in enumerate(positional[: len(COLOR_SLOTS) + 1]):
        if not token:
            break
        typed = classify_token(token, color_allowed=index < len(COLOR_SLOTS))
        if isinstance(typed, FormatToken):
            fmt = typed.format
            break
        colors[COLOR_SLOTS[index]] = typed.value

    return PositionalRoles(
        background=colors.get("background"),
        text_color=colors.get("text_color"),
        format=fmt,
    )

"""Color token normalization.

Accepted inputs: ``transparent``, a small allow-list of CSS color names,
3/4/6/8-digit hex (``#`` optional) and ``rgb()``/``rgba()`` with channels
up to 255. Anything else silently resolves to the caller's fallback.
"""

from __future__ import annotations

import re

from placeholdr.models.image_spec import TRANSPARENT

NAMED_COLORS = frozenset({
    "black", "white", "red", "green", "blue", "yellow", "orange", "purple",
    "pink", "cyan", "magenta", "gray", "grey", "silver", "maroon", "olive",
    "lime", "aqua", "teal", "navy", "fuchsia", "brown", "coral", "crimson",
    "gold", "indigo", "ivory", "khaki", "lavender", "lightblue", "lightgray",
    "lightgreen", "lightyellow", "darkblue", "darkgray", "darkgreen", "darkred",
})

_HEX_RE = re.compile(r"^#?([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")
_RGB_RE = re.compile(
    r"^rgba?\s*\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})"
    r"(?:\s*,\s*([\d.]+))?\s*\)$"
)

_MAX_CHANNEL = 255


def normalize_color(color: str | None, fallback: str = "#555555") -> str:
    """Normalize ``color`` or return ``fallback``. Never raises."""
    if not color or not isinstance(color, str):
        return fallback

    c = color.strip().lower()

    if c == TRANSPARENT:
        return TRANSPARENT

    if c in NAMED_COLORS:
        return c

    hex_match = _HEX_RE.match(c)
    if hex_match:
        return f"#{hex_match.group(1)}"

    rgb_match = _RGB_RE.match(c)
    if rgb_match:
        r, g, b, a = rgb_match.groups()
        if all(int(ch) <= _MAX_CHANNEL for ch in (r, g, b)):
            if a is not None:
                return f"rgba({int(r)},{int(g)},{int(b)},{a})"
            return f"rgb({int(r)},{int(g)},{int(b)})"

    return fallback

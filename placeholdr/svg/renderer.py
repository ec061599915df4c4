"""Write placeholder SVG markup from a resolved ImageSpec.

Layout: font size is an eighth of the short side (never below 12px); the
label is split on newlines into centered ``<tspan>`` lines spaced 1.2em
apart, and the block is vertically centered on the canvas.
"""

from __future__ import annotations

from dataclasses import dataclass

from placeholdr.models.image_spec import ImageSpec
from placeholdr.svg.fonts import get_font
from placeholdr.utils.math_helpers import format_number as _num

MIN_FONT_SIZE = 12.0
FONT_SIZE_DIVISOR = 8
LINE_HEIGHT_RATIO = 1.2
# Baseline nudge so dominant-baseline="middle" text sits optically centered
BASELINE_SHIFT_RATIO = 0.35

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def escape_xml(text: str | None) -> str:
    """Escape the five XML metacharacters."""
    if not text:
        return ""
    return "".join(_XML_ESCAPES.get(ch, ch) for ch in text)


@dataclass(frozen=True)
class TextLayout:
    font_size: float
    line_height: float
    start_y: float
    lines: tuple[str, ...]

    @property
    def total_height(self) -> float:
        return len(self.lines) * self.line_height


def compute_layout(width: int, height: int, label: str) -> TextLayout:
    """Font size and vertical placement for ``label`` on a width×height canvas."""
    font_size = max(MIN_FONT_SIZE, min(width, height) / FONT_SIZE_DIVISOR)
    lines = tuple(label.split("\n"))
    line_height = font_size * LINE_HEIGHT_RATIO
    total_height = len(lines) * line_height
    start_y = (height - total_height) / 2 + font_size * BASELINE_SHIFT_RATIO
    return TextLayout(
        font_size=font_size,
        line_height=line_height,
        start_y=start_y,
        lines=lines,
    )


def render_svg(spec: ImageSpec) -> str:
    """Generate SVG markup for ``spec``. Pure; all inputs are pre-validated."""
    font = get_font(spec.font)
    layout = compute_layout(spec.width, spec.height, spec.label)

    tspans = "".join(
        f'<tspan x="50%" dy="{0 if i == 0 else _num(layout.line_height)}">{escape_xml(line)}</tspan>'
        for i, line in enumerate(layout.lines)
    )

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{spec.width}" height="{spec.height}"'
        f' viewBox="0 0 {spec.width} {spec.height}">',
        "  <defs>",
        "    <style>",
        f"      @import url('{escape_xml(font.url)}');",
        "      .text {",
        f"        font-family: '{font.family}', system-ui, sans-serif;",
        f"        font-size: {_num(layout.font_size)}px;",
        "        font-weight: 400;",
        f"        fill: {spec.text_color};",
        "      }",
        "    </style>",
        "  </defs>",
        f'  <rect width="100%" height="100%" fill="{spec.background}"/>',
        f'  <text class="text" x="50%" y="{_num(layout.start_y)}" text-anchor="middle"'
        ' dominant-baseline="middle">',
        f"    {tspans}",
        "  </text>",
        "</svg>",
    ]
    return "\n".join(lines)

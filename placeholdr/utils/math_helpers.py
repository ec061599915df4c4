"""Math helpers — rounding, clamping, number formatting. No engine imports."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up.

    ``round()`` uses banker's rounding (``round(2.5) == 2``); pixel sizes
    computed from ``W * scale`` must round 2.5 up to 3.
    """
    return math.floor(value + 0.5)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def format_number(value: float, precision: int = 4) -> str:
    """Compact decimal for markup attributes: 50.0 → "50", 12.5 → "12.5"."""
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text

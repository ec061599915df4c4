"""Label text normalization."""

from __future__ import annotations

from placeholdr.models.image_spec import MAX_LABEL_LENGTH


def normalize_text(text: str | None, width: int, height: int) -> str:
    """Default label is ``"{width} x {height}"``.

    Literal ``\\n`` sequences become newlines, surrounding whitespace is
    trimmed, and the result is cut to ``MAX_LABEL_LENGTH`` code points.
    """
    if not text:
        return f"{width} x {height}"
    return text.replace("\\n", "\n").strip()[:MAX_LABEL_LENGTH]

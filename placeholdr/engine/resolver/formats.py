"""Output format keywords, aliases and size-token extensions."""

from __future__ import annotations

import re

from placeholdr.models.image_spec import FORMAT_ALIASES, ImageFormat

_EXTENSION_RE = re.compile(r"\.(svg|png|jpe?g|webp|avif)$", re.IGNORECASE)


def is_format_keyword(token: str | None) -> bool:
    """True when ``token`` (any case) names a supported format or alias."""
    if not token:
        return False
    return token.lower() in FORMAT_ALIASES


def parse_format(value: str | None) -> ImageFormat:
    """Canonical format for ``value``; aliases applied, unknown values → SVG."""
    if not value:
        return ImageFormat.SVG
    key = value.lower()
    if key.startswith("."):
        key = key[1:]
    return FORMAT_ALIASES.get(key, ImageFormat.SVG)


def split_extension(token: str) -> tuple[str, ImageFormat | None]:
    """Strip a trailing ``.png``/``.jpg``/... from ``token``.

    Returns the remaining token and the format named by the extension,
    or ``None`` when there was no recognised extension.
    """
    match = _EXTENSION_RE.search(token)
    if not match:
        return token, None
    return token[: match.start()], parse_format(match.group(1))

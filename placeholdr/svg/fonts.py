"""Web font table — identifier → display family + stylesheet URL."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_FONT = "lato"

_GOOGLE_FONTS_CSS = "https://fonts.googleapis.com/css2?family={}:wght@400;700&display=swap"


@dataclass(frozen=True)
class FontInfo:
    key: str
    family: str
    category: str

    @property
    def url(self) -> str:
        return _GOOGLE_FONTS_CSS.format(self.family.replace(" ", "+"))


_FONTS: dict[str, FontInfo] = {
    f.key: f
    for f in (
        FontInfo("lato", "Lato", "sans-serif"),
        FontInfo("roboto", "Roboto", "sans-serif"),
        FontInfo("opensans", "Open Sans", "sans-serif"),
        FontInfo("montserrat", "Montserrat", "sans-serif"),
        FontInfo("poppins", "Poppins", "sans-serif"),
        FontInfo("raleway", "Raleway", "sans-serif"),
        FontInfo("oswald", "Oswald", "sans-serif"),
        FontInfo("noto", "Noto Sans", "sans-serif"),
        FontInfo("ptsans", "PT Sans", "sans-serif"),
        FontInfo("sourcesans", "Source Sans 3", "sans-serif"),
        FontInfo("inter", "Inter", "sans-serif"),
        FontInfo("lora", "Lora", "serif"),
        FontInfo("playfair", "Playfair Display", "serif"),
        FontInfo("merriweather", "Merriweather", "serif"),
        FontInfo("mono", "JetBrains Mono", "monospace"),
        FontInfo("fira", "Fira Code", "monospace"),
    )
}


def normalize_font_key(name: str | None) -> str:
    """Lowercase and drop spaces/hyphens: "Open Sans" → "opensans"."""
    if not name:
        return ""
    return "".join(ch for ch in name.lower() if ch not in " -\t")


def resolve_font_key(name: str | None, default: str = DEFAULT_FONT) -> str:
    """Known key for ``name``, else ``default`` (itself falling back to lato)."""
    key = normalize_font_key(name)
    if key in _FONTS:
        return key
    default_key = normalize_font_key(default)
    return default_key if default_key in _FONTS else DEFAULT_FONT


def get_font(name: str | None) -> FontInfo:
    return _FONTS[resolve_font_key(name)]


def available_fonts() -> list[FontInfo]:
    return list(_FONTS.values())

"""Parameter resolver — raw path segments + query → validated ImageSpec."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from placeholdr.engine.resolver.colors import normalize_color
from placeholdr.engine.resolver.positional import disambiguate
from placeholdr.engine.resolver.size import parse_size
from placeholdr.engine.resolver.text import normalize_text
from placeholdr.models.image_spec import ImageFormat, ImageSpec, RawRequest, SizeLimits
from placeholdr.svg.fonts import DEFAULT_FONT, resolve_font_key


@dataclass(frozen=True)
class ResolverOptions:
    limits: SizeLimits = field(default_factory=SizeLimits)
    default_background: str = "#eeeeee"
    default_text_color: str = "#555555"
    default_font: str = DEFAULT_FONT
    strict_size: bool = False


def resolve(
    size_token: str,
    positional: Sequence[str | None] = (),
    query: Mapping[str, str] | None = None,
    options: ResolverOptions | None = None,
) -> ImageSpec:
    """Build the ImageSpec for one request.

    Format precedence: size-token extension > positional segment > svg.
    Unrecognized colors, formats and fonts fall back to defaults; the only
    error is ``InvalidDimension`` in strict size mode.
    """
    options = options or ResolverOptions()
    query = query or {}

    size = parse_size(size_token, options.limits, strict=options.strict_size)
    roles = disambiguate(positional)

    background = options.default_background
    if roles.background is not None:
        background = normalize_color(roles.background, options.default_background)

    text_color = options.default_text_color
    if roles.text_color is not None:
        text_color = normalize_color(roles.text_color, options.default_text_color)

    fmt = size.extension_format or roles.format or ImageFormat.SVG

    return ImageSpec(
        width=size.width,
        height=size.height,
        background=background,
        text_color=text_color,
        label=normalize_text(query.get("text"), size.width, size.height),
        font=resolve_font_key(query.get("font"), options.default_font),
        format=fmt,
    )


def resolve_request(request: RawRequest, options: ResolverOptions | None = None) -> ImageSpec:
    query = {k: v for k, v in (("text", request.text), ("font", request.font)) if v is not None}
    return resolve(request.size_token, request.positional, query, options)

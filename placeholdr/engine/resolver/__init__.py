"""Parameter resolver: size, positional ladder, colors, formats, text."""

from placeholdr.engine.resolver.colors import normalize_color
from placeholdr.engine.resolver.formats import parse_format
from placeholdr.engine.resolver.resolver import ResolverOptions, resolve, resolve_request
from placeholdr.engine.resolver.size import parse_size

__all__ = [
    "ResolverOptions",
    "normalize_color",
    "parse_format",
    "parse_size",
    "resolve",
    "resolve_request",
]

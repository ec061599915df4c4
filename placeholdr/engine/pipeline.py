"""Pipeline orchestrator — cache lookup, resolve, render, rasterize, cache.

Per request:
    hit            → cached artifact, nothing else runs
    miss, svg      → resolve → render → cache markup
    miss, raster   → resolve → render → [permit] rasterize → cache bytes
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from placeholdr.config import Settings
from placeholdr.engine.cache import Artifact, ArtifactCache
from placeholdr.engine.errors import PlaceholderError, RenderError
from placeholdr.engine.limiter import RasterLimiter
from placeholdr.engine.raster import RasterOptions, rasterize
from placeholdr.engine.resolver import ResolverOptions, resolve_request
from placeholdr.models.image_spec import ImageFormat, ImageSpec, RawRequest, SizeLimits
from placeholdr.svg.renderer import render_svg

logger = logging.getLogger(__name__)

Rasterizer = Callable[[str, ImageFormat, ImageSpec, RasterOptions], bytes]


@dataclass(frozen=True)
class RenderResult:
    artifact: Artifact
    content_type: str
    cache_hit: bool

    @property
    def body(self) -> bytes:
        if isinstance(self.artifact, str):
            return self.artifact.encode("utf-8")
        return self.artifact


class ImagePipeline:
    """Shared per-process pipeline; owns the cache and the raster permit pool."""

    def __init__(
        self,
        cache: ArtifactCache,
        limiter: RasterLimiter,
        resolver_options: ResolverOptions | None = None,
        raster_options: RasterOptions | None = None,
        rasterizer: Rasterizer = rasterize,
    ) -> None:
        self.cache = cache
        self.limiter = limiter
        self.resolver_options = resolver_options or ResolverOptions()
        self.raster_options = raster_options or RasterOptions()
        self._rasterizer = rasterizer

    async def handle(self, signature: str, request: RawRequest) -> RenderResult:
        entry = self.cache.get(signature)
        if entry is not None:
            logger.debug("Cache HIT %s", signature)
            return RenderResult(entry.artifact, entry.content_type, cache_hit=True)

        logger.debug("Cache MISS %s", signature)
        start = time.perf_counter()

        try:
            spec = resolve_request(request, self.resolver_options)
            markup = render_svg(spec)
        except PlaceholderError:
            raise
        except Exception as e:
            logger.warning("Failed to build %s: %s", signature, e)
            raise RenderError("Could not render image") from e

        content_type = spec.format.mime_type

        if spec.format.is_vector:
            self.cache.put(signature, markup, content_type)
            self._log_render(signature, spec, start)
            return RenderResult(markup, content_type, cache_hit=False)

        async with self.limiter.permit():
            try:
                data = await asyncio.to_thread(
                    self._rasterizer, markup, spec.format, spec, self.raster_options,
                )
            except Exception as e:
                logger.warning("Raster encode failed for %s: %s", signature, e)
                raise RenderError("Could not encode image") from e
            self.cache.put(signature, data, content_type)

        self._log_render(signature, spec, start)
        return RenderResult(data, content_type, cache_hit=False)

    @staticmethod
    def _log_render(signature: str, spec: ImageSpec, start: float) -> None:
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Rendered %s (%dx%d %s) in %.1fms",
            signature, spec.width, spec.height, spec.format.value, elapsed,
        )


def create_pipeline(settings: Settings) -> ImagePipeline:
    """Build the process-wide pipeline from settings."""
    cache = ArtifactCache(
        max_items=settings.cache_max_items,
        max_bytes=settings.cache_max_bytes,
        ttl_seconds=settings.cache_ttl_seconds,
    )
    resolver_options = ResolverOptions(
        limits=SizeLimits(
            min_size=settings.min_size,
            max_size=settings.max_size,
            max_scale=settings.max_scale,
        ),
        default_background=settings.default_background,
        default_text_color=settings.default_text_color,
        default_font=settings.default_font,
        strict_size=settings.strict_size,
    )
    raster_options = RasterOptions(
        dpi=settings.raster_dpi,
        max_supersample_pixels=settings.raster_max_supersample_pixels,
        png_compress_level=settings.png_compress_level,
        webp_quality=settings.webp_quality,
        webp_alpha_quality=settings.webp_alpha_quality,
        jpeg_quality=settings.jpeg_quality,
        jpeg_progressive=settings.jpeg_progressive,
        avif_quality=settings.avif_quality,
        avif_speed=settings.avif_speed,
    )
    return ImagePipeline(
        cache=cache,
        limiter=RasterLimiter(settings.concurrency),
        resolver_options=resolver_options,
        raster_options=raster_options,
    )

"""Health check + meta endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends

from placeholdr import __version__
from placeholdr.dependencies import get_pipeline, get_settings
from placeholdr.engine.pipeline import ImagePipeline
from placeholdr.models.responses import (
    CacheStatsResponse,
    FontResponse,
    FontsResponse,
    HealthResponse,
    RasterStatsResponse,
)
from placeholdr.svg.fonts import available_fonts, resolve_font_key

router = APIRouter()

_STARTED_AT = time.monotonic()


@router.get("/health", response_model=HealthResponse)
async def health(pipeline: ImagePipeline = Depends(get_pipeline)) -> HealthResponse:
    stats = pipeline.cache.stats()
    return HealthResponse(
        status="ok",
        version=__version__,
        cache=CacheStatsResponse(
            count=stats.count,
            total_bytes=stats.total_bytes,
            max_items=stats.max_items,
            max_bytes=stats.max_bytes,
        ),
        raster=RasterStatsResponse(
            concurrency=pipeline.limiter.capacity,
            in_use=pipeline.limiter.in_use,
        ),
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 3),
    )


@router.get("/fonts", response_model=FontsResponse)
async def fonts(settings=Depends(get_settings)) -> FontsResponse:
    return FontsResponse(
        default=resolve_font_key(settings.default_font),
        fonts=[
            FontResponse(key=f.key, family=f.family, category=f.category, url=f.url)
            for f in available_fonts()
        ],
    )

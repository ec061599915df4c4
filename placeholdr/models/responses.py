"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    count: int = 0
    total_bytes: int = 0
    max_items: int = 0
    max_bytes: int = 0


class RasterStatsResponse(BaseModel):
    concurrency: int = 0
    in_use: int = 0


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    cache: CacheStatsResponse = Field(default_factory=CacheStatsResponse)
    raster: RasterStatsResponse = Field(default_factory=RasterStatsResponse)
    uptime_seconds: float = 0.0


class FontResponse(BaseModel):
    key: str
    family: str
    category: str
    url: str


class FontsResponse(BaseModel):
    default: str
    fonts: list[FontResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    message: str

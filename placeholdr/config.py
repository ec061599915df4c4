"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000
    env: str = "development"
    log_level: str = "info"

    # Image constraints
    min_size: int = 10
    max_size: int = 4000
    max_scale: float = 4
    # Fail with InvalidDimension instead of falling back to 400x400
    strict_size: bool = False

    # Defaults
    default_background: str = "#eeeeee"
    default_text_color: str = "#555555"
    default_font: str = "lato"

    # Artifact cache
    cache_ttl_seconds: float = 60 * 60
    cache_max_items: int = 1000
    cache_max_bytes: int = 100 * 1024 * 1024

    # Raster stage
    concurrency: int = 4
    raster_dpi: int = 150
    raster_max_supersample_pixels: int = 16_000_000

    # Encoder knobs
    png_compress_level: int = 6
    webp_quality: int = 85
    webp_alpha_quality: int = 100
    jpeg_quality: int = 85
    jpeg_progressive: bool = True
    avif_quality: int = 80
    avif_speed: int = 6

    # HTTP
    cors_origins: list[str] = ["*"]
    cache_control: str = "public, max-age=31536000, immutable"

    model_config = SettingsConfigDict(
        env_prefix="PLACEHOLDR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()

"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from placeholdr.config import Settings, settings
from placeholdr.engine.pipeline import ImagePipeline


def get_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", settings)


def get_pipeline(request: Request) -> ImagePipeline:
    return request.app.state.pipeline

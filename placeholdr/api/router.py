"""Master router — meta endpoints under /api, images at the root."""

from __future__ import annotations

from fastapi import APIRouter

from placeholdr.api import health, image

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)

image_router = APIRouter()
image_router.include_router(image.router)

"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from placeholdr import __version__
from placeholdr.config import Settings, settings
from placeholdr.engine.errors import PlaceholderError
from placeholdr.engine.pipeline import create_pipeline

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(
        title="Placeholdr",
        description="Placeholder images on the fly — SVG, PNG, WebP, JPEG, AVIF",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
        expose_headers=["X-Cache", "Cache-Control"],
        max_age=86400,
    )

    app.state.settings = app_settings
    # One pipeline per process: shared cache + raster permit pool
    app.state.pipeline = create_pipeline(app_settings)

    _register_error_handlers(app)

    from placeholdr.api.router import api_router, image_router

    # /api first so its paths are not captured by /{size}/{p2}
    app.include_router(api_router)
    app.include_router(image_router)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PlaceholderError)
    async def placeholder_error(request: Request, exc: PlaceholderError) -> JSONResponse:
        logger.info("Invalid request %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Invalid request", "message": str(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            content = {"error": "Not Found", "message": f"Cannot {request.method} {request.url.path}"}
        else:
            content = {"error": "Error", "message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


app = create_app()

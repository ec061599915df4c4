"""GET /{size}/{p2}/{p3}/{p4} — placeholder image generation.

    /400x300                       svg, default colors
    /400x300/png                   png
    /400x300/ff0000                background color
    /400x300/ff0000/ffffff         background + text color
    /400x300/ff0000/ffffff/png     colors + format
    /400x300.png                   format from extension
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from placeholdr.dependencies import get_pipeline, get_settings
from placeholdr.engine.pipeline import ImagePipeline
from placeholdr.models.image_spec import RawRequest

router = APIRouter()


def request_signature(request: Request) -> str:
    """Cache key: path plus query string exactly as received.

    Built from the undecoded bytes, so ``/400%3Ftext=hi`` and
    ``/400?text=hi`` get different keys.
    """
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


async def _generate(
    request: Request,
    size: str,
    positional: tuple[str, ...],
    text: str | None,
    font: str | None,
    pipeline: ImagePipeline,
    settings,
) -> Response:
    raw = RawRequest(size_token=size, positional=positional, text=text, font=font)
    result = await pipeline.handle(request_signature(request), raw)
    return Response(
        content=result.body,
        media_type=result.content_type,
        headers={
            "Cache-Control": settings.cache_control,
            "X-Cache": "HIT" if result.cache_hit else "MISS",
        },
    )


@router.api_route("/{size}", methods=["GET", "HEAD"], include_in_schema=False)
async def image_size(
    request: Request,
    size: str,
    text: str | None = None,
    font: str | None = None,
    pipeline: ImagePipeline = Depends(get_pipeline),
    settings=Depends(get_settings),
) -> Response:
    return await _generate(request, size, (), text, font, pipeline, settings)


@router.api_route("/{size}/{p2}", methods=["GET", "HEAD"], include_in_schema=False)
async def image_p2(
    request: Request,
    size: str,
    p2: str,
    text: str | None = None,
    font: str | None = None,
    pipeline: ImagePipeline = Depends(get_pipeline),
    settings=Depends(get_settings),
) -> Response:
    return await _generate(request, size, (p2,), text, font, pipeline, settings)


@router.api_route("/{size}/{p2}/{p3}", methods=["GET", "HEAD"], include_in_schema=False)
async def image_p3(
    request: Request,
    size: str,
    p2: str,
    p3: str,
    text: str | None = None,
    font: str | None = None,
    pipeline: ImagePipeline = Depends(get_pipeline),
    settings=Depends(get_settings),
) -> Response:
    return await _generate(request, size, (p2, p3), text, font, pipeline, settings)


@router.api_route("/{size}/{p2}/{p3}/{p4}", methods=["GET", "HEAD"], include_in_schema=False)
async def image_p4(
    request: Request,
    size: str,
    p2: str,
    p3: str,
    p4: str,
    text: str | None = None,
    font: str | None = None,
    pipeline: ImagePipeline = Depends(get_pipeline),
    settings=Depends(get_settings),
) -> Response:
    return await _generate(request, size, (p2, p3, p4), text, font, pipeline, settings)

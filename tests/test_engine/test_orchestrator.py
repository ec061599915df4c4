"""Tests for the pipeline orchestrator (fake raster stage)."""

import asyncio

import pytest

from tests.conftest import FAKE_RASTER_BYTES, CountingRasterizer

from placeholdr.engine.cache import ArtifactCache
from placeholdr.engine.errors import InvalidDimension, RenderError
from placeholdr.engine.limiter import RasterLimiter
from placeholdr.engine.pipeline import ImagePipeline, create_pipeline
from placeholdr.engine.resolver import ResolverOptions
from placeholdr.models.image_spec import RawRequest


def _run(pipeline, signature, request):
    return asyncio.run(pipeline.handle(signature, request))


def test_vector_fast_path_skips_raster(pipeline, rasterizer):
    result = _run(pipeline, "/400", RawRequest("400"))
    assert result.content_type == "image/svg+xml"
    assert not result.cache_hit
    assert result.body.startswith(b"<svg")
    assert rasterizer.calls == 0
    assert pipeline.limiter.peak == 0


def test_raster_path(pipeline, rasterizer):
    result = _run(pipeline, "/400/png", RawRequest("400", ("png",)))
    assert result.content_type == "image/png"
    assert result.body == FAKE_RASTER_BYTES + b"png"
    assert rasterizer.calls == 1
    assert pipeline.limiter.peak == 1
    assert pipeline.limiter.in_use == 0


def test_second_identical_request_is_a_hit(pipeline, rasterizer):
    first = _run(pipeline, "/400/webp", RawRequest("400", ("webp",)))
    second = _run(pipeline, "/400/webp", RawRequest("400", ("webp",)))
    assert not first.cache_hit
    assert second.cache_hit
    assert second.body == first.body
    assert second.content_type == "image/webp"
    assert rasterizer.calls == 1


def test_signature_is_not_semantic(pipeline, rasterizer):
    _run(pipeline, "/400.png", RawRequest("400.png"))
    result = _run(pipeline, "/400/png", RawRequest("400", ("png",)))
    assert not result.cache_hit
    assert rasterizer.calls == 2


def test_raster_failure_is_not_cached_and_releases_permit():
    rasterizer = CountingRasterizer(fail=True)
    pipeline = ImagePipeline(ArtifactCache(), RasterLimiter(1), rasterizer=rasterizer)

    with pytest.raises(RenderError):
        _run(pipeline, "/400/png", RawRequest("400", ("png",)))

    assert pipeline.limiter.in_use == 0
    assert len(pipeline.cache) == 0

    # A permit leak would make this hang on the single permit
    rasterizer.fail = False
    result = _run(pipeline, "/400/png", RawRequest("400", ("png",)))
    assert result.body.startswith(FAKE_RASTER_BYTES)


def test_strict_size_failure_is_not_cached(rasterizer):
    pipeline = ImagePipeline(
        ArtifactCache(),
        RasterLimiter(1),
        resolver_options=ResolverOptions(strict_size=True),
        rasterizer=rasterizer,
    )
    with pytest.raises(InvalidDimension):
        _run(pipeline, "/nope", RawRequest("nope"))
    assert len(pipeline.cache) == 0


def test_concurrency_one_serializes_encodes():
    rasterizer = CountingRasterizer(delay=0.05)

    async def scenario():
        pipeline = ImagePipeline(ArtifactCache(), RasterLimiter(1), rasterizer=rasterizer)
        await asyncio.gather(
            pipeline.handle("/100/png", RawRequest("100", ("png",))),
            pipeline.handle("/200/png", RawRequest("200", ("png",))),
            pipeline.handle("/300/jpg", RawRequest("300", ("jpg",))),
        )
        return pipeline

    pipeline = asyncio.run(scenario())
    assert rasterizer.calls == 3
    assert rasterizer.max_active == 1
    assert pipeline.limiter.peak == 1


def test_vector_requests_do_not_wait_for_permits():
    rasterizer = CountingRasterizer(delay=0.2)

    async def scenario():
        pipeline = ImagePipeline(ArtifactCache(), RasterLimiter(1), rasterizer=rasterizer)
        raster = asyncio.create_task(pipeline.handle("/100/png", RawRequest("100", ("png",))))
        await asyncio.sleep(0.02)
        # Raster job holds the only permit; the svg request must still finish first
        vector = await asyncio.wait_for(pipeline.handle("/100", RawRequest("100")), timeout=0.1)
        assert not raster.done()
        await raster
        return vector

    vector = asyncio.run(scenario())
    assert vector.content_type == "image/svg+xml"


def test_create_pipeline_from_settings(test_settings):
    settings = test_settings.model_copy(
        update={"cache_max_items": 3, "concurrency": 2, "default_background": "black"},
    )
    pipeline = create_pipeline(settings)
    assert pipeline.cache.max_items == 3
    assert pipeline.limiter.capacity == 2
    assert pipeline.resolver_options.default_background == "black"
    assert pipeline.raster_options.dpi == 96

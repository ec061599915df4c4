"""Shared test fixtures."""

from __future__ import annotations

import threading
import time

import pytest

from placeholdr.config import Settings
from placeholdr.engine.cache import ArtifactCache
from placeholdr.engine.limiter import RasterLimiter
from placeholdr.engine.pipeline import ImagePipeline
from placeholdr.models.image_spec import ImageFormat, ImageSpec

FAKE_RASTER_BYTES = b"\x89PNG-fake"


def make_spec(**overrides) -> ImageSpec:
    fields = {
        "width": 400,
        "height": 300,
        "background": "#eeeeee",
        "text_color": "#555555",
        "label": "400 x 300",
        "font": "lato",
        "format": ImageFormat.SVG,
    }
    fields.update(overrides)
    return ImageSpec(**fields)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingRasterizer:
    """Stands in for the raster stage; records calls and overlap."""

    def __init__(self, delay: float = 0.0, fail: bool = False) -> None:
        self.delay = delay
        self.fail = fail
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def __call__(self, markup, fmt, spec, options) -> bytes:
        with self._lock:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.fail:
                raise RuntimeError("codec exploded")
            return FAKE_RASTER_BYTES + fmt.value.encode()
        finally:
            with self._lock:
                self.active -= 1


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, raster_dpi=96)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rasterizer() -> CountingRasterizer:
    return CountingRasterizer()


@pytest.fixture
def pipeline(rasterizer) -> ImagePipeline:
    return ImagePipeline(
        cache=ArtifactCache(max_items=50),
        limiter=RasterLimiter(2),
        rasterizer=rasterizer,
    )

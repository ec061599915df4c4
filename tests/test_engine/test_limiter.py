"""Tests for the raster permit pool."""

import asyncio

import pytest

from placeholdr.engine.limiter import RasterLimiter


def test_permits_are_bounded():
    async def scenario() -> RasterLimiter:
        limiter = RasterLimiter(2)

        async def job() -> None:
            async with limiter.permit():
                assert limiter.in_use <= 2
                await asyncio.sleep(0.01)

        await asyncio.gather(*(job() for _ in range(6)))
        return limiter

    limiter = asyncio.run(scenario())
    assert limiter.peak == 2
    assert limiter.in_use == 0


def test_permit_released_on_error():
    async def scenario() -> RasterLimiter:
        limiter = RasterLimiter(1)
        with pytest.raises(RuntimeError):
            async with limiter.permit():
                raise RuntimeError("boom")
        # Would block forever if the permit leaked
        async with limiter.permit():
            pass
        return limiter

    limiter = asyncio.run(asyncio.wait_for(scenario(), timeout=2))
    assert limiter.in_use == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RasterLimiter(0)

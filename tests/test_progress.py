"""Tests for the synthetic progress estimator."""

import asyncio

import pytest

from sudosolve.services.progress import ProgressEstimator


def test_tick_is_capped_below_completion() -> None:
    progress = ProgressEstimator(increment=40, cap=90)

    values = [progress.tick() for _ in range(4)]

    assert values == [40, 80, 90, 90]


def test_invalid_cap_rejected() -> None:
    with pytest.raises(ValueError):
        ProgressEstimator(cap=100)


def test_ticker_climbs_then_stops_at_cap() -> None:
    async def scenario() -> tuple[int, bool]:
        progress = ProgressEstimator(increment=30, cap=90, interval=0.001)
        progress.begin()
        for _ in range(200):
            if progress.value == 90:
                break
            await asyncio.sleep(0.001)
        await asyncio.sleep(0.01)
        return progress.value, progress.is_ticking

    value, ticking = asyncio.run(scenario())

    assert value == 90
    assert ticking is False


def test_finish_jumps_to_complete_then_resets() -> None:
    async def scenario() -> list[int]:
        progress = ProgressEstimator(interval=60.0, reset_delay=0.01)
        progress.begin()
        progress.tick()
        progress.finish()
        seen = [progress.value]
        await asyncio.sleep(0.05)
        seen.append(progress.value)
        return seen

    assert asyncio.run(scenario()) == [100, 0]


def test_begin_cancels_stale_reset_timer() -> None:
    async def scenario() -> int:
        progress = ProgressEstimator(increment=10, interval=60.0, reset_delay=0.01)
        progress.begin()
        progress.finish()
        progress.begin()
        progress.tick()
        await asyncio.sleep(0.05)
        value = progress.value
        progress.cancel()
        return value

    assert asyncio.run(scenario()) == 10


def test_cancel_tears_down_timers() -> None:
    async def scenario() -> tuple[int, bool]:
        progress = ProgressEstimator(interval=0.001)
        progress.begin()
        await asyncio.sleep(0.005)
        progress.cancel()
        await asyncio.sleep(0.005)
        return progress.value, progress.is_ticking

    assert asyncio.run(scenario()) == (0, False)

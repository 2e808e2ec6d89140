"""Tests for the fixed-interval pacer."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from src.pipeline.pacer import Pacer


class FakeClock:
    """Monotonic clock advanced by the patched asyncio.sleep."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.now += seconds


class TestPacer:
    async def test_first_wait_is_immediate(self) -> None:
        clock = FakeClock()
        pacer = Pacer(0.1, clock=clock)
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            slept = await pacer.wait()
        assert slept == 0.0
        mock_sleep.assert_not_called()

    async def test_waits_out_remaining_interval(self) -> None:
        clock = FakeClock()
        pacer = Pacer(0.1, clock=clock)
        with patch.object(asyncio, "sleep", side_effect=clock.sleep) as mock_sleep:
            await pacer.wait()
            clock.now += 0.03
            slept = await pacer.wait()
        assert slept == pytest.approx(0.07)
        mock_sleep.assert_called_once()

    async def test_no_sleep_when_interval_already_elapsed(self) -> None:
        clock = FakeClock()
        pacer = Pacer(0.1, clock=clock)
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            await pacer.wait()
            clock.now += 5.0
            slept = await pacer.wait()
        assert slept == 0.0
        mock_sleep.assert_not_called()

    async def test_releases_spaced_by_interval(self) -> None:
        clock = FakeClock()
        pacer = Pacer(0.1, clock=clock)
        releases: list[float] = []
        with patch.object(asyncio, "sleep", side_effect=clock.sleep):
            for _ in range(5):
                await pacer.wait()
                releases.append(clock.now)
        gaps = [b - a for a, b in zip(releases, releases[1:])]
        assert all(gap >= 0.1 - 1e-9 for gap in gaps)

    async def test_zero_interval_never_sleeps(self) -> None:
        pacer = Pacer(0.0)
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            for _ in range(3):
                await pacer.wait()
        mock_sleep.assert_not_called()

    async def test_reset_makes_next_wait_immediate(self) -> None:
        clock = FakeClock()
        pacer = Pacer(1.0, clock=clock)
        with patch.object(asyncio, "sleep", new_callable=AsyncMock) as mock_sleep:
            await pacer.wait()
            pacer.reset()
            await pacer.wait()
        mock_sleep.assert_not_called()

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError, match="interval_seconds"):
            Pacer(-0.5)

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the test timeline and per-VU lifecycle.

Tests:
- Duration parsing
- Timeline derivation from stages (duration, ramp-down window, validity)
- Ramp-down fraction and per-ordinal activity, including monotonicity
- Ramp-up start offsets
- SessionLifecycle latching, stop and terminate
"""

import pytest

from vusim.common.config import StageConfig
from vusim.timing import RampSchedule, SessionLifecycle
from vusim.timing.durations import parse_duration
from tests.harness import TimeTraveler

# =============================================================================
# Helper Functions
# =============================================================================


def make_schedule(*stages: tuple[str | float, int], max_concurrency: int | None = None) -> RampSchedule:
    """Create a schedule from `(duration, target)` pairs."""
    configs = [StageConfig(duration=d, target=t) for d, t in stages]
    if max_concurrency is None:
        max_concurrency = max(t for _, t in stages) or 1
    return RampSchedule.from_stages(configs, max_concurrency)


@pytest.fixture
def hundred_vu_schedule() -> RampSchedule:
    """5 minute ramp-up, 5 minute hold, 5 minute ramp-down of 100 VUs."""
    return make_schedule(("5m", 100), ("5m", 100), ("5m", 0))


# =============================================================================
# Durations
# =============================================================================


class TestParseDuration:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("90s", 90.0),
            ("5m", 300.0),
            ("1h30m", 5400.0),
            ("250ms", 0.25),
            ("2d", 172_800.0),
            ("1.5m", 90.0),
            ("1m 30s", 90.0),
            ("12", 12.0),
            (12, 12.0),
            (0.5, 0.5),
            ("0s", 0.0),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "abc", "5x", "m5", "5m junk", "-5", -1, True])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


# =============================================================================
# RampSchedule
# =============================================================================


class TestRampSchedule:
    def test_timeline_derivation(self, hundred_vu_schedule):
        assert hundred_vu_schedule.test_duration_sec == 900.0
        assert hundred_vu_schedule.ramp_down_duration_sec == 300.0
        assert hundred_vu_schedule.ramp_down_start_sec == 600.0
        assert hundred_vu_schedule.is_valid

    @pytest.mark.parametrize("stage_count", [0, 1, 2])
    def test_fewer_than_three_stages_is_invalid(self, stage_count):
        schedule = make_schedule(*[("1m", 5)] * stage_count, max_concurrency=5)
        assert not schedule.is_valid

    def test_ramp_down_example(self, hundred_vu_schedule):
        assert hundred_vu_schedule.fraction_remaining(750.0) == pytest.approx(0.5)
        assert hundred_vu_schedule.is_active(40, 750.0)
        assert not hundred_vu_schedule.is_active(60, 750.0)

    @pytest.mark.parametrize(
        "elapsed,expected",
        [(0.0, 1.0), (599.0, 1.0), (600.0, 1.0), (660.0, 0.8), (900.0, 0.0), (5000.0, 0.0)],
    )
    def test_fraction_remaining(self, hundred_vu_schedule, elapsed, expected):
        assert hundred_vu_schedule.fraction_remaining(elapsed) == pytest.approx(expected)

    def test_every_vu_active_before_ramp_down(self, hundred_vu_schedule):
        assert all(hundred_vu_schedule.is_active(n, 599.0) for n in range(1, 101))

    def test_is_active_is_monotonic_per_ordinal(self, hundred_vu_schedule):
        for ordinal in (1, 17, 50, 99, 100):
            seen_inactive = False
            for elapsed in range(0, 1000, 5):
                active = hundred_vu_schedule.is_active(ordinal, float(elapsed))
                if seen_inactive:
                    assert not active, f"VU {ordinal} reactivated at {elapsed}s"
                seen_inactive = seen_inactive or not active
            assert seen_inactive

    def test_highest_ordinals_stop_first(self, hundred_vu_schedule):
        active = [n for n in range(1, 101) if hundred_vu_schedule.is_active(n, 780.0)]
        assert active == list(range(1, len(active) + 1))

    def test_zero_length_ramp_down_stops_everyone_at_end(self):
        schedule = make_schedule(("10s", 4), ("10s", 4), (0, 0))
        assert schedule.is_active(4, 20.0)
        assert not schedule.is_active(1, 20.5)

    @pytest.mark.parametrize(
        "ordinal,expected",
        [(1, 30.0), (2, 60.0), (5, 150.0), (10, 300.0)],
    )
    def test_start_offset_linear_ramp(self, ordinal, expected):
        schedule = make_schedule(("5m", 10), ("5m", 10), ("1m", 0))
        assert schedule.start_offset(ordinal) == pytest.approx(expected)

    def test_start_offset_across_stages(self):
        schedule = make_schedule(("10s", 2), ("10s", 2), ("20s", 6), ("10s", 0))
        assert schedule.start_offset(2) == pytest.approx(10.0)
        assert schedule.start_offset(3) == pytest.approx(25.0)
        assert schedule.start_offset(6) == pytest.approx(40.0)

    def test_start_offset_never_reached(self):
        schedule = make_schedule(("10s", 2), ("10s", 2), ("10s", 0), max_concurrency=5)
        assert schedule.start_offset(3) is None

    def test_start_offsets_are_non_decreasing(self):
        schedule = make_schedule(("1m", 25), ("1m", 25), ("1m", 0))
        offsets = [schedule.start_offset(n) for n in range(1, 26)]
        assert offsets == sorted(offsets)

    def test_to_vu_schedule(self, hundred_vu_schedule):
        vu_schedule = hundred_vu_schedule.to_vu_schedule(test_start=123.0)
        assert vu_schedule.test_start == 123.0
        assert vu_schedule.ramp_down_start_sec == 600.0
        assert vu_schedule.max_concurrency == 100


# =============================================================================
# SessionLifecycle
# =============================================================================


class TestSessionLifecycle:
    def test_latches_once_inactive(self, hundred_vu_schedule):
        clock = TimeTraveler(start=0.0)
        lifecycle = SessionLifecycle(hundred_vu_schedule, 60, test_start=0.0, clock=clock)
        assert lifecycle.is_active()

        clock.travel_to(750.0)
        assert not lifecycle.is_active()

        # Even a clock going backwards does not reactivate the VU
        clock.travel_to(10.0)
        assert not lifecycle.is_active()
        assert lifecycle.stopped

    def test_stop_deactivates_immediately(self, hundred_vu_schedule):
        lifecycle = SessionLifecycle(
            hundred_vu_schedule, 1, test_start=0.0, clock=TimeTraveler(start=0.0)
        )
        lifecycle.stop()
        assert not lifecycle.is_active()

    def test_remaining(self, hundred_vu_schedule):
        clock = TimeTraveler(start=100.0)
        lifecycle = SessionLifecycle(hundred_vu_schedule, 1, test_start=100.0, clock=clock)
        clock.travel(400.0)
        assert lifecycle.remaining() == pytest.approx(500.0)
        clock.travel(10_000.0)
        assert lifecycle.remaining() == 0.0

    @pytest.mark.asyncio
    async def test_terminate_sleeps_past_the_end_of_the_test(
        self, hundred_vu_schedule, monkeypatch
    ):
        sleeps: list[float] = []

        async def record_sleep(delay):
            sleeps.append(delay)

        monkeypatch.setattr("asyncio.sleep", record_sleep)
        clock = TimeTraveler(start=0.0)
        lifecycle = SessionLifecycle(hundred_vu_schedule, 1, test_start=0.0, clock=clock)
        clock.travel_to(300.0)

        await lifecycle.terminate()

        assert sleeps == [pytest.approx(1200.0)]
        assert not lifecycle.is_active()

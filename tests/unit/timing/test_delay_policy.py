# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import random

import pytest

from vusim.common.enums import OutcomeKind
from vusim.timing import DelayPolicy
from vusim.timing.delays import THINK_TIME_RANGE_SEC


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    recorded: list[float] = []

    async def record_sleep(delay):
        recorded.append(delay)

    monkeypatch.setattr("asyncio.sleep", record_sleep)
    return recorded


class TestDelayPolicy:
    @pytest.mark.asyncio
    async def test_delay_range_uses_minimum_when_delays_disabled(self, sleeps):
        policy = DelayPolicy(enable_delays=False, random_source=random.Random(1))
        assert await policy.delay_range(3.0, 9.0) == 3.0
        assert sleeps == [3.0]

    @pytest.mark.asyncio
    async def test_delay_range_is_within_bounds(self, sleeps):
        policy = DelayPolicy(enable_delays=True, random_source=random.Random(1))
        for _ in range(100):
            await policy.delay_range(2.0, 2.25)
        assert all(2.0 <= s <= 2.25 for s in sleeps)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "previous,expected_sleeps",
        [
            (None, 1),
            (OutcomeKind.CONTINUE, 1),
            (OutcomeKind.HANDLED_ERROR, 1),
            (OutcomeKind.NO_OP_CONTINUE, 0),
        ],
    )
    async def test_think_time_skipped_only_after_no_op(self, sleeps, previous, expected_sleeps):
        policy = DelayPolicy(enable_delays=False)
        await policy.think(previous)
        assert len(sleeps) == expected_sleeps
        if sleeps:
            assert sleeps[0] == THINK_TIME_RANGE_SEC[0]

    @pytest.mark.asyncio
    async def test_backoff_ignores_enable_delays(self, sleeps):
        policy = DelayPolicy(enable_delays=False, random_source=random.Random(5))
        slept = await policy.backoff(600.0, vu_ordinal=3)
        assert 0.0 <= slept <= 600.0
        assert sleeps == [slept]

    @pytest.mark.asyncio
    async def test_negative_delay_sleeps_zero(self, sleeps):
        await DelayPolicy().delay(-1.0)
        assert sleeps == [0.0]

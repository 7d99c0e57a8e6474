# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Pacing delays of a simulated user.

All delays are plain timed sleeps. When delays are disabled every ranged delay
uses its minimum, which keeps a run deterministic in duration.
"""

import asyncio
import random

from vusim.common import random_generator as rng
from vusim.common.enums import OutcomeKind
from vusim.common.vusim_logger import VUSimLogger

_logger = VUSimLogger(__name__)

THINK_TIME_RANGE_SEC = (1.0, 20.0)
POLLING_DELAY_RANGE_SEC = (2.0, 2.25)


class DelayPolicy:
    """Think time, polling and backoff delays for one virtual user."""

    def __init__(
        self, enable_delays: bool = True, random_source: random.Random | None = None
    ) -> None:
        self.enable_delays = enable_delays
        self._rng = random_source or rng.derive("timing.delays")

    def random_in_range(self, minimum: float, maximum: float) -> float:
        return minimum + (maximum - minimum) * self._rng.random()

    def random(self) -> float:
        return self._rng.random()

    async def delay(self, seconds: float) -> None:
        """Always sleep for exactly `seconds`."""
        _logger.trace(lambda: f"sleep_time={seconds}")
        await asyncio.sleep(max(0.0, seconds))

    async def delay_range(self, min_sec: float, max_sec: float) -> float:
        """Sleep a random time in [min_sec, max_sec], or min_sec when delays are disabled."""
        sleep_time = (
            self.random_in_range(min_sec, max_sec) if self.enable_delays else min_sec
        )
        await self.delay(sleep_time)
        return sleep_time

    async def think(self, previous: OutcomeKind | None) -> None:
        """Player thinking time, skipped after an action that found nothing to do."""
        if previous is not None and previous.skips_think_time:
            return
        await self.delay_range(*THINK_TIME_RANGE_SEC)

    async def polling_delay(self) -> None:
        await self.delay_range(*POLLING_DELAY_RANGE_SEC)

    async def backoff(self, max_sec: float, vu_ordinal: int | None = None) -> float:
        """Sleep a uniformly random time up to `max_sec`, regardless of `enable_delays`."""
        sleep_time = max_sec * self._rng.random()
        _logger.warning(f"Backing off VU: {vu_ordinal}, {sleep_time:.1f} seconds")
        await self.delay(sleep_time)
        return sleep_time

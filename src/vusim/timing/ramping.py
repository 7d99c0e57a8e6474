# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Ramp-up and ramp-down scheduling of virtual users.

The test timeline is a list of stages, each ramping linearly to a target VU
count. The last stage is the ramp-down window. VU `n` (1-based) starts when
the interpolated target first reaches `n`, and stops once the ramp-down has
progressed far enough that `n > fraction_remaining * max_concurrency`.

Example:
    ```python
    schedule = RampSchedule.from_stages(config.stages, config.max_concurrency)
    lifecycle = SessionLifecycle(schedule, ordinal=7, test_start=time.monotonic())

    while lifecycle.is_active():
        ...
    await lifecycle.terminate()
    ```
"""

import asyncio
import time
from collections.abc import Callable, Sequence

from pydantic import ConfigDict, Field

from vusim.common.config import StageConfig
from vusim.common.models import VirtualUserSchedule, VUSimBaseModel
from vusim.common.vusim_logger import VUSimLogger
from vusim.timing.durations import parse_duration

_logger = VUSimLogger(__name__)

MIN_STAGES = 3
"""A timeline needs at least a ramp-up, a steady state and a ramp-down stage."""

# =============================================================================
# RampSchedule - pure timeline math
# =============================================================================


class RampStage(VUSimBaseModel):
    model_config = ConfigDict(frozen=True)

    duration_sec: float = Field(..., ge=0, description="Length of the stage.")
    target: int = Field(..., ge=0, description="VU count at the end of the stage.")


class RampSchedule(VUSimBaseModel):
    """Derived test timeline. All methods are pure functions of their arguments."""

    model_config = ConfigDict(frozen=True)

    stages: tuple[RampStage, ...] = Field(..., description="Ordered stages.")
    max_concurrency: int = Field(..., ge=1, description="Target number of VUs.")

    @classmethod
    def from_stages(
        cls, stages: Sequence[StageConfig], max_concurrency: int
    ) -> "RampSchedule":
        return cls(
            stages=tuple(
                RampStage(duration_sec=parse_duration(s.duration), target=s.target)
                for s in stages
            ),
            max_concurrency=max_concurrency,
        )

    @property
    def is_valid(self) -> bool:
        return len(self.stages) >= MIN_STAGES

    @property
    def test_duration_sec(self) -> float:
        return sum(stage.duration_sec for stage in self.stages)

    @property
    def ramp_down_duration_sec(self) -> float:
        return self.stages[-1].duration_sec if self.stages else 0.0

    @property
    def ramp_down_start_sec(self) -> float:
        return self.test_duration_sec - self.ramp_down_duration_sec

    def fraction_remaining(self, elapsed_sec: float) -> float:
        """Fraction of `max_concurrency` still allowed to run at `elapsed_sec`."""
        if elapsed_sec <= self.ramp_down_start_sec:
            return 1.0
        if self.ramp_down_duration_sec <= 0:
            return 0.0
        ramp_down_elapsed = elapsed_sec - self.ramp_down_start_sec
        return max(0.0, 1.0 - ramp_down_elapsed / self.ramp_down_duration_sec)

    def is_active(self, ordinal: int, elapsed_sec: float) -> bool:
        """Whether VU `ordinal` (1-based) may still run at `elapsed_sec`.

        Every VU is active until the ramp-down window begins. Within it, VUs
        with the highest ordinals stop first, one step at a time.
        """
        return ordinal <= self.fraction_remaining(elapsed_sec) * self.max_concurrency

    def start_offset(self, ordinal: int) -> float | None:
        """Elapsed time at which the stage targets first reach `ordinal`.

        Returns None if no stage ever ramps up to `ordinal`.
        """
        stage_start = 0.0
        previous_target = 0
        for stage in self.stages:
            if previous_target < ordinal <= stage.target:
                span = stage.target - previous_target
                return stage_start + stage.duration_sec * (
                    (ordinal - previous_target) / span
                )
            stage_start += stage.duration_sec
            previous_target = stage.target
        return None

    def to_vu_schedule(self, test_start: float) -> VirtualUserSchedule:
        return VirtualUserSchedule(
            test_start=test_start,
            test_duration_sec=self.test_duration_sec,
            ramp_down_start_sec=self.ramp_down_start_sec,
            ramp_down_duration_sec=self.ramp_down_duration_sec,
            max_concurrency=self.max_concurrency,
        )


# =============================================================================
# SessionLifecycle - per VU, latching
# =============================================================================


class SessionLifecycle:
    """Decides, for one VU, whether it should keep running.

    The decision is re-evaluated on every call and latches: once the VU has
    been told to stop it is never reactivated, even if the clock goes backwards.
    """

    def __init__(
        self,
        schedule: RampSchedule,
        ordinal: int,
        test_start: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.schedule = schedule
        self.ordinal = ordinal
        self.test_start = test_start
        self._clock = clock
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def elapsed(self) -> float:
        return self._clock() - self.test_start

    def remaining(self) -> float:
        return max(0.0, self.schedule.test_duration_sec - self.elapsed())

    def is_active(self) -> bool:
        if self._stopped:
            return False
        elapsed = self.elapsed()
        _logger.trace(lambda: f"VU {self.ordinal}: elapsed={elapsed:.3f}")
        if not self.schedule.is_active(self.ordinal, elapsed):
            self._stopped = True
            _logger.info(
                lambda: f"Ramping down VU: {self.ordinal}, "
                f"fraction={self.schedule.fraction_remaining(elapsed):.3f}, "
                f"elapsed={elapsed:.1f}"
            )
            return False
        return True

    def stop(self) -> None:
        """Permanently deactivate this VU (used for fatal and non-retryable failures)."""
        self._stopped = True

    async def terminate(self) -> None:
        """Deactivate and sleep past the end of the test so no further requests are made.

        The controller cancels the sleep once the global deadline passes.
        """
        self._stopped = True
        sleep_time = self.remaining() * 2
        _logger.debug(lambda: f"VU {self.ordinal}: terminating, sleeping {sleep_time:.1f}s")
        await asyncio.sleep(sleep_time)

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Factories for configs and fully wired virtual users running against a FakeTransport."""

from typing import Any

from vusim.common.config import (
    RetryConfig,
    SimulationConfig,
    StackEndpoints,
    StageConfig,
)
from vusim.dispatch import ForcedSequence
from vusim.metrics import SimulationMetrics
from vusim.timing import RampSchedule
from vusim.workers import VirtualUser
from tests.harness.fake_transport import FakeTransport
from tests.harness.time_traveler import TimeTraveler

TEST_URL_BASE = "http://backend.test/"
TEST_IDENTITY_URL = "http://identity.test/"


def make_config(**overrides: Any) -> SimulationConfig:
    """A config pointing at the fake backend, with delays off and instant retries."""
    values: dict[str, Any] = {
        "stack": "test",
        "client_stack_data": {
            "test": StackEndpoints(
                client_id="test-client",
                url_base=TEST_URL_BASE,
                identity_url=TEST_IDENTITY_URL,
            )
        },
        "stages": [
            StageConfig(duration="10s", target=2),
            StageConfig(duration="60s", target=2),
            StageConfig(duration="10s", target=0),
        ],
        "enable_delays": False,
        "retry": RetryConfig(max_attempts=3, backoff_min_sec=0, backoff_max_sec=0),
    }
    values.update(overrides)
    return SimulationConfig(**values)


def make_transport() -> FakeTransport:
    return FakeTransport(url_base=TEST_URL_BASE)


def make_virtual_user(
    config: SimulationConfig | None = None,
    transport: FakeTransport | None = None,
    clock: TimeTraveler | None = None,
    ordinal: int = 1,
    metrics: SimulationMetrics | None = None,
    vus_active: int = 2,
) -> VirtualUser:
    config = config or make_config()
    clock = clock or TimeTraveler()
    schedule = RampSchedule.from_stages(config.stages, config.max_concurrency)
    forced = (
        ForcedSequence.from_descriptors(config.forced_actions)
        if config.forced_actions
        else None
    )
    return VirtualUser(
        ordinal,
        ordinal - 1,
        config,
        schedule,
        clock(),
        transport if transport is not None else make_transport(),
        metrics or SimulationMetrics(),
        vus_active=lambda: vus_active,
        forced=forced,
        clock=clock,
    )

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures for unit testing vusim components.

This file contains fixtures that are automatically discovered by pytest
and made available to test functions in the same directory and subdirectories.
"""

import pytest

from vusim.actions import ActionContext
from vusim.common.config import SimulationConfig
from vusim.metrics import SimulationMetrics
from vusim.screens import SCREEN_TABLE, ScreenRunner
from vusim.workers import VirtualUser
from tests.harness import FakeTransport, TimeTraveler
from tests.harness.backend_documents import make_user_document
from tests.harness.simulation import make_config, make_transport, make_virtual_user


@pytest.fixture
def config() -> SimulationConfig:
    return make_config()


@pytest.fixture
def transport() -> FakeTransport:
    return make_transport()


@pytest.fixture
def clock() -> TimeTraveler:
    return TimeTraveler()


@pytest.fixture
def metrics() -> SimulationMetrics:
    return SimulationMetrics()


@pytest.fixture
def virtual_user(config, transport, clock, metrics) -> VirtualUser:
    return make_virtual_user(config, transport, clock, metrics=metrics)


@pytest.fixture
def ctx(virtual_user) -> ActionContext:
    """Context of a signed-in VU whose cached user is fully topped up."""
    virtual_user.state.set_user(make_user_document())
    return virtual_user.ctx


@pytest.fixture
def runner(ctx) -> ScreenRunner:
    return ScreenRunner(ctx, SCREEN_TABLE)

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Shared test configuration and fixtures for all test types.

ONLY ADD FIXTURES HERE THAT ARE USED IN ALL TEST TYPES.
DO NOT ADD FIXTURES THAT ARE ONLY USED IN A SPECIFIC TEST TYPE.
"""

import asyncio

import pytest

from vusim.common import random_generator as rng

TEST_SEED = 42

_REAL_SLEEP = asyncio.sleep


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    """Patch asyncio.sleep so think times, backoffs and ramp waits complete instantly."""
    monkeypatch.setattr("asyncio.sleep", lambda delay, result=None: _REAL_SLEEP(0, result))
    yield


@pytest.fixture(autouse=True)
def seeded_rng():
    """Seed every derived generator, and forget the seed afterwards."""
    rng.init(TEST_SEED)
    yield
    rng.reset()

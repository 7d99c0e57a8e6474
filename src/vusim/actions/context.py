# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import random
from collections.abc import Callable
from dataclasses import dataclass

from vusim.actions.backend_api import GameBackend
from vusim.clients import AuthSession, ErrorClassifier
from vusim.common.config import SimulationConfig
from vusim.common.models import VirtualUserState
from vusim.common.vusim_logger import VUSimLogger
from vusim.dispatch import ForcedSequence
from vusim.metrics import SimulationMetrics
from vusim.timing import DelayPolicy, SessionLifecycle


@dataclass(slots=True)
class ActionContext:
    """Everything the actions and screens of one virtual user work with.

    Owned by a single VU task. Only `config`, `metrics` and `forced` are
    shared with other VUs.
    """

    state: VirtualUserState
    backend: GameBackend
    auth: AuthSession
    config: SimulationConfig
    metrics: SimulationMetrics
    delays: DelayPolicy
    lifecycle: SessionLifecycle
    classifier: ErrorClassifier
    rng: random.Random
    logger: VUSimLogger
    vus_active: Callable[[], int]
    test_id: str = "local"
    forced: ForcedSequence | None = None

    @property
    def test_suffix(self) -> str:
        """Suffix the event seeding step appends to configured invite codes."""
        return f"_{self.test_id}"

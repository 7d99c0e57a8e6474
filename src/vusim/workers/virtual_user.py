# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""A virtual user: one simulated player running sessions until it is ramped down."""

import time
from collections.abc import Callable

from vusim.actions import ActionContext, GameBackend
from vusim.clients import AuthSession, ErrorClassifier, ResilientRequestClient
from vusim.common import random_generator as rng
from vusim.common.config import SimulationConfig
from vusim.common.constants import NANOS_PER_MILLIS
from vusim.common.enums import OutcomeKind
from vusim.common.identity_utils import phone_number, username_from_phone
from vusim.common.mixins import VUSimLoggerMixin
from vusim.common.models import VirtualUserState
from vusim.dispatch import FATAL_ABORT, ActionOutcome, ForcedSequence
from vusim.identity import CognitoIdentityProvider
from vusim.metrics import SimulationMetrics
from vusim.screens import SCREEN_TABLE, ScreenRunner, run_session
from vusim.timing import DelayPolicy, RampSchedule, SessionLifecycle
from vusim.transports import HttpTransportProtocol


class VirtualUser(VUSimLoggerMixin):
    """Runs session iterations for one simulated player.

    An iteration is one session from the loading screen onwards. A suspended
    session is followed by a new one while the VU is active; a fatal abort
    stops the VU for the rest of the run.

    Args:
        ordinal: 1-based VU number within this task.
        instance_number: Globally unique number the player identity is derived from.
        config: The simulation config, shared read-only by all VUs.
        schedule: The test timeline.
        test_start: Monotonic clock value at which the test started.
        transport: The shared HTTP transport.
        metrics: The shared metrics.
        vus_active: Returns the number of VUs currently running.
        forced: Optional forced action sequence, shared by all VUs.
        test_id: Identifier of the test, used to derive invite codes.
    """

    def __init__(
        self,
        ordinal: int,
        instance_number: int,
        config: SimulationConfig,
        schedule: RampSchedule,
        test_start: float,
        transport: HttpTransportProtocol,
        metrics: SimulationMetrics,
        vus_active: Callable[[], int],
        forced: ForcedSequence | None = None,
        test_id: str = "local",
        clock: Callable[[], float] = time.monotonic,
        **kwargs,
    ) -> None:
        super().__init__(logger_name=f"vusim.vu.{ordinal}", **kwargs)
        self.ordinal = ordinal
        self.instance_number = instance_number
        self.config = config
        self.metrics = metrics
        self.rng = rng.derive(f"vu.{instance_number}")
        self.lifecycle = SessionLifecycle(schedule, ordinal, test_start, clock=clock)

        phone = phone_number(instance_number)
        self.state = VirtualUserState(
            ordinal=ordinal,
            instance_number=instance_number,
            phone=phone,
            username=username_from_phone(phone),
            schedule=schedule.to_vu_schedule(test_start),
        )
        endpoints = config.endpoints
        self.delays = DelayPolicy(config.enable_delays, random_source=self.rng)
        identity = CognitoIdentityProvider(
            transport, endpoints.client_id, endpoint=endpoints.identity_url
        )
        self.auth = AuthSession(
            identity, self.state, refresh_margin_sec=config.token_refresh_margin_sec
        )
        client = ResilientRequestClient(
            transport,
            self.auth,
            config,
            metrics,
            self.delays,
            instance_number,
            url_base=endpoints.url_base,
        )
        self.ctx = ActionContext(
            state=self.state,
            backend=GameBackend(client, self.state),
            auth=self.auth,
            config=config,
            metrics=metrics,
            delays=self.delays,
            lifecycle=self.lifecycle,
            classifier=ErrorClassifier(config.error_message_prefixes),
            rng=self.rng,
            logger=self.logger,
            vus_active=vus_active,
            test_id=test_id,
            forced=forced,
        )

    async def run(self) -> None:
        """Run sessions until the VU is ramped down or aborts."""
        self.info(
            lambda: f"VU: {self.ordinal}, instance: {self.instance_number}, "
            f"phone: {self.state.phone}"
        )
        while self.lifecycle.is_active():
            outcome = await self.run_iteration()
            if outcome.kind == OutcomeKind.FATAL_ABORT:
                self.lifecycle.stop()
                self.metrics.fatal_aborts.add(1)
                self.error(f"Fatal abort. Stopping VU: {self.ordinal}")
                return
        self.info(lambda: f"VU {self.ordinal} finished")

    async def run_iteration(self) -> ActionOutcome:
        """Run one session and record its count and duration."""
        self.metrics.sessions.add(1)
        self.state.reset_session()
        runner = ScreenRunner(self.ctx, SCREEN_TABLE)
        start_ns = time.perf_counter_ns()
        try:
            outcome = await run_session(runner)
        except Exception:
            self.exception(f"Fatal: unexpected error in VU {self.ordinal}")
            outcome = FATAL_ABORT
        finally:
            self.metrics.session_duration.add(
                (time.perf_counter_ns() - start_ns) / NANOS_PER_MILLIS
            )
        self.debug(lambda: f"VU {self.ordinal}: session ended with {outcome}")
        return outcome

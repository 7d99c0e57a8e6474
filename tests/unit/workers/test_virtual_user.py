# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for VirtualUser and HeartbeatMonitor.

Tests:
- Identity derived from the instance number
- One iteration: session counting, duration, unexpected exceptions
- The run loop: stop on fatal abort, repeat on suspend until ramped down
- Recovery from a backend outage while bootstrapping
- Heartbeat polling of the health endpoint
"""

import pytest

from vusim.common.enums import ErrCode
from vusim.dispatch import FATAL_ABORT, FINISHED, SUSPEND
from vusim.workers import HeartbeatMonitor
from tests.harness import app_error, server_error
from tests.harness.backend_documents import script_session, script_sign_in
from tests.harness.fake_transport import ScriptedResponse
from tests.harness.simulation import make_config, make_virtual_user
from tests.harness.time_traveler import TimeTraveler

RUN_SESSION = "vusim.workers.virtual_user.run_session"

# =============================================================================
# Helper Functions
# =============================================================================


def scripted_sessions(*outcomes, on_call=None):
    """A stand-in for run_session returning `outcomes` in order."""
    remaining = list(outcomes)
    calls = []

    async def fake_run_session(runner):
        calls.append(runner)
        if on_call is not None:
            on_call(len(calls))
        return remaining.pop(0)

    fake_run_session.calls = calls
    return fake_run_session


# =============================================================================
# Identity
# =============================================================================


class TestIdentity:
    def test_first_instance(self, virtual_user):
        assert virtual_user.instance_number == 0
        assert virtual_user.state.phone == "+10005550100"
        assert virtual_user.state.username == "load_00000"

    def test_instance_follows_ordinal(self, config, transport, clock):
        vu = make_virtual_user(config, transport, clock, ordinal=43)
        assert vu.instance_number == 42
        assert vu.state.username == "load_00042"


# =============================================================================
# Iterations
# =============================================================================


class TestRunIteration:
    @pytest.mark.asyncio
    async def test_session_is_counted_and_timed(self, transport, clock, metrics):
        script_session(transport)
        vu = make_virtual_user(
            make_config(forced_actions=["home_screen.new_tab", "session.exit"]),
            transport,
            clock,
            metrics=metrics,
        )

        assert await vu.run_iteration() == SUSPEND

        assert metrics.sessions.total == 1
        assert metrics.session_duration.count == 1

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_fatal(self, virtual_user, metrics, monkeypatch):
        async def broken_session(runner):
            raise RuntimeError("boom")

        monkeypatch.setattr(RUN_SESSION, broken_session)

        assert await virtual_user.run_iteration() == FATAL_ABORT
        assert metrics.session_duration.count == 1

    @pytest.mark.asyncio
    async def test_session_state_is_reset(self, virtual_user, monkeypatch):
        monkeypatch.setattr(RUN_SESSION, scripted_sessions(SUSPEND))
        virtual_user.state.opponent_username = "someone"

        await virtual_user.run_iteration()

        assert virtual_user.state.user is None
        assert virtual_user.state.token is None
        assert virtual_user.state.opponent_username is None


class TestRun:
    @pytest.mark.asyncio
    async def test_fatal_abort_stops_the_vu(self, virtual_user, metrics, monkeypatch):
        fake = scripted_sessions(FATAL_ABORT, SUSPEND)
        monkeypatch.setattr(RUN_SESSION, fake)

        await virtual_user.run()

        assert len(fake.calls) == 1
        assert metrics.fatal_aborts.total == 1
        assert virtual_user.lifecycle.stopped

    @pytest.mark.asyncio
    async def test_suspend_repeats_until_ramped_down(
        self, virtual_user, metrics, clock, monkeypatch
    ):
        def ramp_down_after_third(calls: int) -> None:
            if calls == 3:
                clock.travel(10_000)

        fake = scripted_sessions(SUSPEND, SUSPEND, SUSPEND, on_call=ramp_down_after_third)
        monkeypatch.setattr(RUN_SESSION, fake)

        await virtual_user.run()

        assert len(fake.calls) == 3
        assert metrics.sessions.total == 3
        assert metrics.fatal_aborts.total == 0

    @pytest.mark.asyncio
    async def test_finished_session_ends_the_run(self, virtual_user, metrics, monkeypatch):
        def stop(_calls: int) -> None:
            virtual_user.lifecycle.stop()

        monkeypatch.setattr(RUN_SESSION, scripted_sessions(FINISHED, on_call=stop))

        await virtual_user.run()

        assert metrics.sessions.total == 1
        assert metrics.fatal_aborts.total == 0

    @pytest.mark.asyncio
    async def test_ramped_down_vu_never_starts(self, virtual_user, clock, monkeypatch):
        fake = scripted_sessions()
        monkeypatch.setattr(RUN_SESSION, fake)
        clock.travel(10_000)

        await virtual_user.run()

        assert fake.calls == []

    @pytest.mark.asyncio
    async def test_backend_outage_at_bootstrap_is_retried_next_session(
        self, virtual_user, transport, metrics
    ):
        script_sign_in(transport)
        transport.script(
            "startup",
            server_error(503),
            server_error(503),
            server_error(503),
            ScriptedResponse(200, {}),
        )
        transport.script(
            "users/session_start", app_error(ErrCode.ALREADY_PLAYING, "Already playing")
        )

        await virtual_user.run()

        assert transport.count("startup") == 4
        assert transport.count("users/session_start") == 1
        assert metrics.sessions.total == 2
        assert metrics.fatal_aborts.total == 0
        assert virtual_user.lifecycle.stopped


# =============================================================================
# Heartbeat
# =============================================================================


class TestHeartbeatMonitor:
    @pytest.mark.asyncio
    async def test_polls_until_duration_elapses(self, transport):
        transport.script("health", server_error(503))
        monitor = HeartbeatMonitor(
            transport,
            f"{transport.url_base}health",
            duration_sec=30.0,
            clock=TimeTraveler(step=10.0),
        )

        await monitor.run()

        assert transport.count("health") == 2
        assert monitor.failures == 2
        assert monitor.successes == 0

    @pytest.mark.asyncio
    async def test_counts_successes(self, transport):
        monitor = HeartbeatMonitor(
            transport,
            f"{transport.url_base}health",
            duration_sec=15.0,
            clock=TimeTraveler(step=10.0),
        )

        await monitor.run()

        assert monitor.successes == 1
        assert transport.last("health").method == "GET"

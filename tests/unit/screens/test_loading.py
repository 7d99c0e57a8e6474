# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the loading screen.

Tests:
- Successful bootstrap and configuration fetch
- Registration of unknown users and activation of queued users
- Account top-ups for a fresh user
- Failure policy: identity throttling, transient errors, non-retryable errors
"""

import pytest

from vusim.common.enums import ErrCode
from vusim.dispatch import CONTINUE, FATAL_ABORT, FINISHED, SUSPEND
from vusim.screens import run_loading
from vusim.screens.loading import IDENTITY_THROTTLE_BACKOFF_SEC, TRANSIENT_BACKOFF_SEC
from tests.harness import app_error, ok, server_error
from tests.harness.backend_documents import (
    identity_error,
    make_user_document,
    script_session,
    script_sign_in,
)

SIGN_IN_ROUTES = ["startup", "SignUp", "InitiateAuth", "RespondToAuthChallenge"]
CONFIG_ROUTES = ["config/towerdata", "config/appData", "users", "config/charitydata"]


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    recorded: list[float] = []

    async def record_sleep(delay):
        recorded.append(delay)

    monkeypatch.setattr("asyncio.sleep", record_sleep)
    return recorded


# =============================================================================
# Bootstrap
# =============================================================================


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_active_user_loads_configuration(self, ctx, transport):
        script_session(transport, make_user_document(username="load_00000"))

        assert await run_loading(ctx) == CONTINUE

        assert transport.routes() == [*SIGN_IN_ROUTES, "users/session_start", *CONFIG_ROUTES]
        assert ctx.state.user.username == "load_00000"
        assert ctx.state.token.access_token == "access-1"

    @pytest.mark.asyncio
    async def test_unknown_user_is_registered(self, ctx, transport, metrics):
        script_sign_in(transport)
        transport.script("users/session_start", app_error(ErrCode.USER_NOT_FOUND))
        transport.script("users/register", ok(make_user_document()))

        assert await run_loading(ctx) == CONTINUE

        assert transport.count("users/register") == 1
        assert metrics.api_errors.total == 0

    @pytest.mark.asyncio
    async def test_queued_user_is_activated(self, ctx, transport):
        queued = make_user_document(inviteData={"status": "queued", "invited": False})
        script_sign_in(transport)
        transport.script("users/session_start", ok(queued))
        transport.script("users/activate", ok(make_user_document()))

        assert await run_loading(ctx) == CONTINUE

        assert transport.last("users/activate").body == {"username": ctx.state.username}

    @pytest.mark.asyncio
    async def test_active_user_is_not_activated_again(self, ctx, transport):
        script_session(transport)
        await run_loading(ctx)
        assert transport.count("users/activate") == 0

    @pytest.mark.asyncio
    async def test_fresh_user_is_topped_up(self, ctx, transport):
        fresh = make_user_document(
            rank=3, account=0, secondary_account=0, available_games={}, inventory=[]
        )
        script_sign_in(transport)
        transport.script("users/session_start", ok(fresh))

        assert await run_loading(ctx) == CONTINUE

        top_ups = transport.routes("POST")[len(SIGN_IN_ROUTES) + 1 :]
        assert top_ups == [
            "users/set_xp",
            "users/unlock_game",
            "users/unlock_game",
            "users/unlock_game",
            "users/set_balance",
            "users/set_secondary_balance",
            "users/add_item",
            "users/add_item",
        ]
        unlocked = [r.body["game"] for r in transport.requests if r.route == "users/unlock_game"]
        assert unlocked == ["CrystalCaveGame", "ShootingGalleryGame", "AsteroidGame"]
        items = [r.body for r in transport.requests if r.route == "users/add_item"]
        assert items == [
            {"item": "megaSpin", "quantity": 500},
            {"item": "basicSpin", "quantity": 1000},
        ]
        assert transport.last("users/set_xp").body == {"xp": 1734}

    @pytest.mark.asyncio
    async def test_failed_top_up_stops_bootstrap(self, ctx, transport):
        script_sign_in(transport)
        transport.script("users/session_start", ok(make_user_document(rank=3)))
        transport.script("users/set_xp", app_error(ErrCode.INTERNAL_ERROR))

        assert await run_loading(ctx) == FINISHED
        assert transport.count("config/towerdata") == 0


# =============================================================================
# Failure policy
# =============================================================================


class TestFailurePolicy:
    @pytest.mark.asyncio
    async def test_identity_throttle_backs_off_and_aborts(self, ctx, transport, metrics, sleeps):
        script_sign_in(transport)
        transport.script("InitiateAuth", identity_error("TooManyRequestsException"))

        assert await run_loading(ctx) == FATAL_ABORT

        assert metrics.cognito_throttles.total == 1
        assert 0 <= sleeps[-1] <= IDENTITY_THROTTLE_BACKOFF_SEC
        assert transport.count("users/session_start") == 0

    @pytest.mark.asyncio
    async def test_transient_failure_backs_off_and_suspends(self, ctx, transport, metrics, sleeps):
        transport.script("startup", server_error(503))

        assert await run_loading(ctx) == SUSPEND

        assert transport.count("startup") == 3
        assert metrics.cognito_throttles.total == 0
        assert 0 <= sleeps[-1] <= TRANSIENT_BACKOFF_SEC
        assert not ctx.lifecycle.stopped

    @pytest.mark.asyncio
    async def test_non_retryable_failure_finishes_the_vu(self, ctx, transport):
        script_sign_in(transport)
        transport.script(
            "users/session_start", app_error(ErrCode.ALREADY_PLAYING, "Already playing")
        )

        assert await run_loading(ctx) == FINISHED

        assert ctx.lifecycle.stopped
        assert not ctx.lifecycle.is_active()
        assert transport.count("config/towerdata") == 0

    @pytest.mark.asyncio
    async def test_missing_user_finishes_the_vu(self, ctx, transport):
        script_sign_in(transport)
        transport.script("users/session_start", ok({}))

        assert await run_loading(ctx) == FINISHED

        assert ctx.state.user is None
        assert ctx.lifecycle.stopped

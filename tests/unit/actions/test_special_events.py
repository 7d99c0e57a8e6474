# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for choosing, joining, rejoining and claiming special events."""

import random

import pytest

from vusim.actions.special_events import (
    claim_prize,
    hidden_access_code,
    join_event,
    rejoin_event,
    select_event,
)
from vusim.common.models import SpecialEvent, SpecialEventSequence
from vusim.dispatch import CONTINUE, HANDLED_ERROR, NO_OP
from tests.harness import app_error
from tests.harness.backend_documents import make_user_document
from tests.harness.simulation import make_config, make_virtual_user

OPEN_CLOSE = "2999-01-01T00:00:00Z"
PAST_CLOSE = "2000-01-01T00:00:00Z"


def event(event_id: str = "e-1", **fields) -> SpecialEvent:
    values = {"id": event_id, "name": "Weekly", "type": "tournament", "close": OPEN_CLOSE}
    values.update(fields)
    return SpecialEvent.model_validate(values)


def sequence(last=(), current=(), next=()) -> SpecialEventSequence:
    return SpecialEventSequence(last=list(last), current=list(current), next=list(next))


@pytest.fixture
def events_ctx(transport, clock, metrics):
    """A signed-in VU whose config seeds one public and one hidden invite-only event."""
    config = make_config(
        events=[
            event("def-1", name="Invite Cup", hasInviteCode=True, inviteCode="CUP"),
            event("def-2", name="Secret", isHidden=True, inviteCode="SECRET"),
        ],
        max_hidden_tournaments=1,
    )
    vu = make_virtual_user(config, transport, clock, metrics=metrics)
    vu.state.set_user(make_user_document(username="load_00001"))
    return vu.ctx


class TestSelectEvent:
    @pytest.mark.parametrize(
        "statuses,expected",
        [
            (["uninvolved", "playing", "won"], "won"),
            (["active", "eliminated", "playing"], "playing"),
            (["eliminated", "active"], "active"),
            (["uninvolved", "eliminated"], "eliminated"),
            (["uninvolved"], "uninvolved"),
        ],
    )
    def test_current_events_by_priority(self, statuses, expected):
        current = [event(f"e-{i}", userStatus=s) for i, s in enumerate(statuses)]
        selected = select_event(sequence(current=current), random.Random(1))
        assert selected.user_status == expected

    def test_past_before_upcoming(self):
        selected = select_event(
            sequence(last=[event("past")], next=[event("soon")]), random.Random(1)
        )
        assert selected.id == "past"

    def test_nothing_to_select(self):
        assert select_event(None, random.Random(1)) is None
        assert select_event(sequence(), random.Random(1)) is None


class TestHiddenAccessCode:
    def test_code_with_test_suffix(self, events_ctx):
        assert hidden_access_code(events_ctx, sequence()) == "SECRET_local"

    def test_already_joined(self, events_ctx):
        joined = event("hidden-1", name="Secret", isHidden=True, hasInviteCode=True)
        assert hidden_access_code(events_ctx, sequence(current=[joined])) is None


class TestJoinEvent:
    @pytest.mark.asyncio
    async def test_join_public_event(self, ctx, transport):
        assert await join_event(ctx, event()) == CONTINUE
        assert transport.last("special_events/join").body == {"eventId": "e-1"}

    @pytest.mark.asyncio
    async def test_closed_event(self, ctx, transport):
        assert await join_event(ctx, event(close=PAST_CLOSE)) == NO_OP
        assert transport.requests == []

    @pytest.mark.parametrize("currency,cost", [("primary", 601), ("secondary", 201)])
    @pytest.mark.asyncio
    async def test_unaffordable(self, ctx, transport, currency, cost):
        assert await join_event(ctx, event(joinCost=cost, joinCurrency=currency)) == NO_OP
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_invite_code_from_definition(self, events_ctx, transport):
        invite_only = event("e-9", name="Invite Cup", hasInviteCode=True)

        assert await join_event(events_ctx, invite_only) == CONTINUE
        assert transport.last("special_events/join").body == {
            "eventId": "e-9",
            "inviteCode": "CUP_local",
        }

    @pytest.mark.asyncio
    async def test_explicit_access_code(self, events_ctx, transport):
        invite_only = event("e-9", name="Invite Cup", hasInviteCode=True)

        await join_event(events_ctx, invite_only, access_code="SECRET_local")

        assert transport.last("special_events/join").body["inviteCode"] == "SECRET_local"

    @pytest.mark.asyncio
    async def test_no_configured_code(self, ctx, transport):
        assert await join_event(ctx, event(hasInviteCode=True)) == NO_OP
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_join_rejected(self, ctx, transport):
        transport.script("special_events/join", app_error(50, "Event full"))
        assert await join_event(ctx, event()) == HANDLED_ERROR


class TestRejoinAndClaim:
    @pytest.mark.asyncio
    async def test_rejoin(self, ctx, transport):
        eliminated = event(userNextRejoinCost=50, userRejoinCurrency="primary")
        assert await rejoin_event(ctx, eliminated) == CONTINUE
        assert transport.last("special_events/rejoin").body == {"eventId": "e-1"}

    @pytest.mark.asyncio
    async def test_no_rejoin_cost(self, ctx, transport):
        assert await rejoin_event(ctx, event()) == NO_OP
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_claim_prize(self, events_ctx, transport, metrics):
        assert await claim_prize(events_ctx, event()) == CONTINUE
        assert transport.last("special_events/claim").body == {
            "eventId": "e-1",
            "claimant": "load_00001@loadtest.tallyup.com",
        }
        assert metrics.event_prizes_claimed.total == 1

    @pytest.mark.asyncio
    async def test_claim_error_is_only_a_warning(self, ctx, transport, metrics):
        transport.script("special_events/claim", app_error(60, "Already claimed"))

        assert await claim_prize(ctx, event()) == HANDLED_ERROR
        assert metrics.event_prizes_claimed.total == 0

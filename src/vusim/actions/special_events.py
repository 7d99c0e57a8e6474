# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Special events (tournaments): choosing, joining, rejoining and claiming prizes."""

import random

from vusim.actions.context import ActionContext
from vusim.actions.outcomes import check_response, to_outcome
from vusim.common.enums import CurrencyType, UserSpecialEventStatus
from vusim.common.models import SpecialEvent, SpecialEventSequence
from vusim.dispatch import NO_OP, ActionOutcome

CURRENT_EVENT_PRIORITY = (
    (UserSpecialEventStatus.WON, UserSpecialEventStatus.RUNNER_UP),
    (UserSpecialEventStatus.PLAYING,),
    (UserSpecialEventStatus.ACTIVE,),
    (UserSpecialEventStatus.ELIMINATED,),
    (UserSpecialEventStatus.UNINVOLVED,),
)
"""Statuses of running events in the order a player attends to them."""


def select_event(
    sequence: SpecialEventSequence | None, rng: random.Random
) -> SpecialEvent | None:
    """The running event needing the most attention, else a random past or upcoming one."""
    if sequence is None:
        return None
    for statuses in CURRENT_EVENT_PRIORITY:
        event = next((e for e in sequence.current if e.user_status in statuses), None)
        if event is not None:
            return event
    if sequence.last:
        return rng.choice(sequence.last)
    if sequence.next:
        return rng.choice(sequence.next)
    return None


def find_event_definition(ctx: ActionContext, event: SpecialEvent) -> SpecialEvent | None:
    return next(
        (d for d in ctx.config.events if event.matches_definition(d)),
        None,
    )


def hidden_access_code(
    ctx: ActionContext, sequence: SpecialEventSequence | None
) -> str | None:
    """Access code of a configured hidden event the user has not joined yet.

    Returns None once the user is in `max_hidden_tournaments` hidden events.
    """
    current = sequence.current if sequence else []
    if sum(1 for e in current if e.is_hidden) >= ctx.config.max_hidden_tournaments:
        return None
    definition = next(
        (
            d
            for d in ctx.config.events
            if d.is_hidden and not any(e.matches_definition(d) for e in current)
        ),
        None,
    )
    if definition is None or not definition.invite_code:
        return None
    return definition.invite_code + ctx.test_suffix


def _can_afford(ctx: ActionContext, cost: float, currency: CurrencyType | str | None) -> bool:
    if currency == CurrencyType.PRIMARY:
        return ctx.state.has_account(cost)
    return ctx.state.has_secondary_account(cost)


async def claim_prize(ctx: ActionContext, event: SpecialEvent) -> ActionOutcome:
    username = ctx.state.user.username if ctx.state.user else ctx.state.username
    result = await ctx.backend.claim_special_event(
        event.id, f"{username}@loadtest.tallyup.com"
    )
    outcome = check_response(ctx, result, "special_events/claim", only_fatal=True)
    if outcome is not None:
        return outcome
    if result.error is None:
        ctx.metrics.event_prizes_claimed.add(1)
    return to_outcome(result)


async def join_event(
    ctx: ActionContext, event: SpecialEvent, access_code: str | None = None
) -> ActionOutcome:
    """Join an open event the user can afford, with its invite code if it needs one."""
    if event.is_closed():
        return NO_OP
    if event.join_cost and not _can_afford(ctx, event.join_cost, event.join_currency):
        return NO_OP

    invite_code = None
    if event.has_invite_code:
        if access_code:
            invite_code = access_code
        else:
            definition = find_event_definition(ctx, event)
            if definition is None or not definition.invite_code:
                ctx.logger.warning(
                    f"VU {ctx.state.ordinal}: No configured invite code for event {event.name}"
                )
                return NO_OP
            invite_code = definition.invite_code + ctx.test_suffix

    result = await ctx.backend.join_special_event(event.id, invite_code)
    outcome = check_response(ctx, result, "special_events/join")
    return outcome if outcome is not None else to_outcome(result)


async def rejoin_event(ctx: ActionContext, event: SpecialEvent) -> ActionOutcome:
    """Buy back into an event after elimination, while the entry window is open."""
    if not event.user_next_rejoin_cost or event.is_closed():
        return NO_OP
    if not _can_afford(ctx, event.user_next_rejoin_cost, event.user_rejoin_currency):
        return NO_OP
    result = await ctx.backend.rejoin_special_event(event.id)
    outcome = check_response(ctx, result, "special_events/rejoin")
    return outcome if outcome is not None else to_outcome(result)

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Account level behaviors: session bootstrap, configuration, cash out, spins and goals."""

import math

from vusim.actions.context import ActionContext
from vusim.actions.outcomes import check_response, log_rank_details
from vusim.common.enums import (
    ConfigType,
    ErrCode,
    GameType,
    ItemType,
    ProgressTrackerState,
    UserQueueStatus,
)
from vusim.common.identity_utils import username_from_number
from vusim.common.models import LevelDescriptor, ProgressTrackers, RequestResult

# Top-ups applied at the start of every session so that the simulated user has
# skipped the tutorial goals, can play every level and game, and can keep
# playing for a while without running out of money or spins.
TOP_UP_MIN_RANK = 20
TOP_UP_XP = 1734
TOP_UP_GAMES = (GameType.CRYSTAL_CAVERNS, GameType.MONKEY_BUSINESS, GameType.BLASTEROIDS)
TOP_UP_BALANCE = 500
TOP_UP_SECONDARY_BALANCE = 100
# Item quantities are two-decimal fixed point values (x100)
TOP_UP_ITEMS = ((ItemType.MEGA_SPIN, 500), (ItemType.BASIC_SPIN, 1000))

AD_WATCH_RANGE_SEC = (5.0, 35.0)
CASH_OUT_CONFIRM_RANGE_SEC = (1.0, 30.0)
SET_INVITER_ATTEMPTS = 10


# =============================================================================
# Session bootstrap
# =============================================================================


async def session_start(ctx: ActionContext) -> RequestResult:
    """Start the app, sign in, register and activate if needed, then top up the account.

    Returns:
        The first failed result, or the last successful one. On success the
        cached user is set.
    """
    state = ctx.state
    backend = ctx.backend

    result = await backend.startup()
    if result.error is not None:
        return result
    result = await ctx.auth.authenticate()
    if result.error is not None:
        return result

    state.user = None
    result = await backend.session_start()
    if ctx.classifier.has_code(result.error, ErrCode.USER_NOT_FOUND):
        result = await backend.register()
    if result.error is not None:
        return result

    invite_data = result.data.get("inviteData") if isinstance(result.data, dict) else None
    if not invite_data or invite_data.get("status") != UserQueueStatus.PLAYING:
        result = await backend.activate(state.username)
        if result.error is not None:
            return result

    state.set_user(result.data)
    user = state.user
    if user is None:
        return result

    top_ups = []
    if user.rank < TOP_UP_MIN_RANK:
        top_ups.append(lambda: backend.set_xp(TOP_UP_XP))
    for game in TOP_UP_GAMES:
        if not user.is_game_unlocked(game):
            top_ups.append(lambda game=game: backend.unlock_game(game))
    if user.account < TOP_UP_BALANCE:
        top_ups.append(lambda: backend.set_balance(TOP_UP_BALANCE))
    if user.secondary_account < TOP_UP_SECONDARY_BALANCE:
        top_ups.append(lambda: backend.set_secondary_balance(TOP_UP_SECONDARY_BALANCE))
    for item, quantity in TOP_UP_ITEMS:
        if user.find_item(item) is None:
            top_ups.append(lambda item=item, quantity=quantity: backend.add_item(item, quantity))

    for top_up in top_ups:
        result = await top_up()
        if result.error is not None:
            return result

    state.set_user(result.data)
    return result


async def load_game_config(ctx: ActionContext) -> None:
    """Fetch the configuration documents the client loads after sign in."""
    state = ctx.state
    backend = ctx.backend
    result = await backend.get_config(ConfigType.TOWER_DATA)
    if result.error is None and isinstance(result.data, list):
        state.levels = [
            LevelDescriptor.model_validate(level)
            for stage in result.data
            for level in stage
        ]
        state.max_level = max(
            (level.level for level in state.levels if level.available), default=0
        )
    await backend.get_config(ConfigType.APP_DATA)
    await backend.get_user()
    await backend.get_config(ConfigType.CHARITY_DATA)


# =============================================================================
# Settings and wallet
# =============================================================================


async def set_inviter(ctx: ActionContext) -> RequestResult | None:
    """Name another simulated user as this user's inviter.

    Returns:
        None if the user already has an inviter or no other user was found.
    """
    state = ctx.state
    user = state.user
    if user is None or (user.invite_data is not None and user.invite_data.invited):
        return None
    ctx.logger.info(lambda: f"VU {state.ordinal}: Set inviter...")
    vus = ctx.vus_active()
    for _ in range(SET_INVITER_ATTEMPTS):
        n = 1 + math.floor((vus - 1) * ctx.rng.random())
        inviter = username_from_number(n)
        if inviter != user.username:
            result = await ctx.backend.set_inviter(inviter)
            if result.error is None:
                state.set_user(result.data)
            return result
    ctx.logger.warning(f"VU {state.ordinal}: Cannot find another user for set_inviter")
    return None


async def cash_out(ctx: ActionContext) -> RequestResult:
    """Cash out the whole balance, donating a random 10-100% of it."""
    state = ctx.state
    ctx.logger.info(lambda: f"VU {state.ordinal}: Cash out...")
    if state.user is None:
        ctx.logger.error(f"VU {state.ordinal}: No user for cash out!")
        return RequestResult.failure("No user!")

    result = await ctx.backend.cashout_start()
    if check_response(ctx, result, "users/cashout_start") is not None:
        return result
    if isinstance(result.data, dict) and result.data.get("isAllowed"):
        balance = state.user.account
        charity_percent = 10 + round(90 * ctx.rng.random())
        charity_amount = math.floor(balance * (charity_percent / 100))
        player_amount = balance - charity_amount
        await ctx.delays.delay_range(*CASH_OUT_CONFIRM_RANGE_SEC)
        phone = state.user.phone or state.phone
        result = await ctx.backend.cashout_finish(
            charity_percent,
            charity_amount,
            player_amount,
            f"fake_{phone[2:]}@tallyup.com",
        )
        check_response(ctx, result, "users/cashout_finish")
    return result


async def home_spinner(ctx: ActionContext) -> RequestResult:
    """Watch an ad, then use a mega spin or a basic spin."""
    state = ctx.state
    choice = round(100 * ctx.rng.random())
    result = await ctx.backend.ads_start()
    if result.error is not None:
        return result
    ctx.logger.debug(lambda: f"VU {state.ordinal}: Watching ad...")
    await ctx.delays.delay_range(*AD_WATCH_RANGE_SEC)
    result = await ctx.backend.ads_finish()
    if result.error is not None or state.user is None:
        return result

    has_mega = state.user.has_usable_item(ItemType.MEGA_SPIN)
    has_basic = state.user.has_usable_item(ItemType.BASIC_SPIN)
    if has_mega and (choice > 50 or not has_basic):
        item, counter = ItemType.MEGA_SPIN, ctx.metrics.mega_spins
    elif has_basic:
        item, counter = ItemType.BASIC_SPIN, ctx.metrics.basic_spins
    else:
        return result

    ctx.logger.debug(lambda: f"VU {state.ordinal}: Home screen using {item}...")
    result = await ctx.backend.use_item(item)
    if result.error is None:
        counter.add(1)
        state.set_user(result.data)
    else:
        log_rank_details(ctx, result, f"item: {item}")
    return result


def has_spins(ctx: ActionContext) -> bool:
    user = ctx.state.user
    return user is not None and (
        user.has_usable_item(ItemType.BASIC_SPIN)
        or user.has_usable_item(ItemType.MEGA_SPIN)
    )


# =============================================================================
# Goals
# =============================================================================


async def refresh_progress_trackers(ctx: ActionContext) -> RequestResult:
    result = await ctx.backend.get_progress_trackers()
    if result.error is None and isinstance(result.data, dict):
        ctx.state.progress_trackers = ProgressTrackers.model_validate(result.data)
    return result


async def claim_goal_awards(ctx: ActionContext) -> RequestResult:
    """Claim the award of the first completed goal, if any."""
    state = ctx.state
    ctx.logger.info(lambda: f"VU {state.ordinal}: Claiming goal rewards...")
    trackers = state.progress_trackers
    if trackers is None:
        return RequestResult()
    claimable = next(
        (
            goal
            for goal in trackers.goals
            if goal.id > 0 and goal.state == ProgressTrackerState.COMPLETE
        ),
        None,
    )
    if claimable is None:
        return RequestResult()

    ctx.logger.info(lambda: f"VU {state.ordinal}: Claiming award for {claimable.id}")
    result = await ctx.backend.claim_progress_tracker(claimable.id)
    if result.error is None:
        if isinstance(result.data, dict):
            state.progress_trackers = ProgressTrackers.model_validate(result.data)
        ctx.metrics.goal_awards_claimed.add(1)
    return result

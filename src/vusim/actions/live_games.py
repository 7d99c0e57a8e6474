# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Live (matchmade) games: request a match, wait for an opponent, play every round.

Matchmaking is polled every 2-2.25s. A request still unmatched after
`matchmaking_timeout_sec` is cancelled and reported as a cancelled result,
which the screens treat as a normal outcome rather than an error.
"""

import math
import random
import time

from vusim.actions.context import ActionContext
from vusim.actions.moves import begin_round_timer, game_from, has_game_state, make_move
from vusim.actions.outcomes import is_fatal, log_rank_details
from vusim.common.constants import NANOS_PER_MILLIS
from vusim.common.enums import (
    ClientEventType,
    ConfigType,
    UserPlaySessionStatus,
    UserPlaySessionType,
)
from vusim.common.models import RequestResult, VirtualUserState

LOAD_RANGE_SEC = (2.0, 3.0)
MATCH_SPINNER_RANGE_SEC = (12.0, 13.0)
GAME_INTRO_RANGE_SEC = (4.0, 5.0)
FINISH_ANIMATION_RANGE_SEC = (15.0, 18.0)
MAX_LEVEL_PICKS = 100
ALREADY_MATCHED_REASON = "already_matched"


def max_level_for(balance: float | None) -> int:
    """Highest level a balance can pay for: levels double in cost."""
    if not balance or balance <= 0:
        return 0
    return math.floor(math.log2(balance) + 1)


def pick_level(state: VirtualUserState, rng: random.Random) -> int:
    account = state.user.account if state.user else 0
    level = round(max_level_for(account) * rng.random()) if account else 0
    return min(max(level, 0), state.max_level)


def _elapsed_ms(start_ns: int) -> float:
    return (time.perf_counter_ns() - start_ns) / NANOS_PER_MILLIS


async def request_level(
    ctx: ActionContext, session_type: UserPlaySessionType, level: int
) -> RequestResult:
    """Request a match and wait until the live session is playing.

    Returns:
        The last result. `cancelled` is set when matchmaking timed out or the
        request was rejected without a fatal error.
    """
    state = ctx.state
    backend = ctx.backend
    result = await backend.request_match(session_type, level)
    if result.error is not None:
        ctx.logger.error(f"VU {state.ordinal}: Error! games/request_match: {result.error}")
        log_rank_details(ctx, result, f"level: {level}")
        return result if is_fatal(result.error) else RequestResult(cancelled=True)

    data = result.data if isinstance(result.data, dict) else {}
    state.set_user(data.get("user"))
    session_id = data.get("sessionId")
    live = state.user.live_session if state.user else None
    if live is None or live.id != session_id:
        return _invariant_failure(
            ctx, f"Live session {live.id if live else None} doesn't match returned id {session_id}"
        )

    status = live.status
    start = time.monotonic()
    polls = 0
    while status != UserPlaySessionStatus.PLAYING:
        if not status:
            return _invariant_failure(
                ctx, f"Bad session status in request_level after {polls} polls: {live}"
            )
        elapsed = time.monotonic() - start
        if elapsed > ctx.config.matchmaking_timeout_sec:
            ctx.logger.error(
                f"VU {state.ordinal}: No match after {elapsed:.1f} secs - cancelling! status={status}"
            )
            cancel = await backend.cancel_request_level()
            if not ctx.classifier.has_reason(cancel.error, ALREADY_MATCHED_REASON):
                await ctx.delays.polling_delay()
                await backend.get_user()
                ctx.metrics.live_game_cancel_requests.add(1)
                return RequestResult(cancelled=True)
            ctx.logger.error(f"VU {state.ordinal}: {cancel.error}")
        await ctx.delays.polling_delay()
        await backend.get_user()
        live = state.user.live_session if state.user else None
        status = live.status if live else None
        polls += 1

    state.opponent_username = live.opponent_username
    result = await backend.find_user(state.opponent_username)
    if result.error is not None:
        ctx.logger.error(
            f"VU {state.ordinal}: Error! request_level({session_type}, {level}) "
            f"finding opponent: {result.error}"
        )
        return result if is_fatal(result.error) else RequestResult(cancelled=True)
    await ctx.delays.delay_range(*MATCH_SPINNER_RANGE_SEC)
    return result


def _invariant_failure(ctx: ActionContext, message: str) -> RequestResult:
    ctx.logger.error(f"VU {ctx.state.ordinal}: {message}")
    return RequestResult.failure(message)


async def load_live_game(ctx: ActionContext, game_id: str) -> RequestResult:
    await ctx.delays.delay_range(*LOAD_RANGE_SEC)
    result = await ctx.backend.post_game_event(game_id, ClientEventType.FINISHED_LOADING)
    if result.error is not None:
        return result

    first = True
    while not has_game_state(result):
        if not first:
            await ctx.delays.polling_delay()
        first = False
        result = await ctx.backend.get_game(game_id)
        if result.error is not None:
            return result
    game = game_from(result)
    ctx.state.opponent_is_bot = game.is_bot if game else None
    return result


async def play_level(
    ctx: ActionContext, session_type: UserPlaySessionType, level: int
) -> RequestResult:
    """Play one live game from matchmaking to the acknowledged result."""
    state = ctx.state
    ctx.logger.info(lambda: f"VU {state.ordinal}: Play level {level}...")
    if state.user is None:
        return _invariant_failure(ctx, "No user!")

    matchmaking_start_ns = time.perf_counter_ns()
    result = await request_level(ctx, session_type, level)
    if result.cancelled or result.error is not None:
        return result

    live = state.user.live_session if state.user else None
    if live is None or live.status != UserPlaySessionStatus.PLAYING or not live.game:
        return _invariant_failure(ctx, "No live session found after request_level")

    game_id = live.game
    tags = {"game": live.game_type or "", "level": str(live.matched_level)}
    ctx.metrics.live_games.add(1, tags)

    result = await load_live_game(ctx, game_id)
    if result.error is not None:
        ctx.logger.error(f"VU {state.ordinal}: {result.error}")
        return result
    game = game_from(result)
    if game is None:
        return _invariant_failure(ctx, f"Game {game_id} has no id after loading")
    await ctx.delays.delay_range(*GAME_INTRO_RANGE_SEC)

    ctx.metrics.matching_delay.add(_elapsed_ms(matchmaking_start_ns), tags)
    ctx.metrics.bots_percent.add(1 if game.is_bot else 0, tags)

    game_start_ns = time.perf_counter_ns()
    n = 1
    win_status = game.game_status.get("winStatus")
    while not win_status:
        round_number = n
        round_start_ns = time.perf_counter_ns()
        result = await begin_round_timer(ctx, game)
        if result.error is not None:
            return result
        game = game_from(result) or game
        result = await make_move(ctx, game)
        if result.error is not None:
            return result
        game = game_from(result) or game

        while round_number == n and not win_status:
            await ctx.delays.polling_delay()
            result = await ctx.backend.get_game(game_id)
            if result.error is not None:
                return result
            polled = game_from(result)
            if polled is not None and polled.data:
                game = polled
                round_number = polled.game_status.get("roundNumber")
                win_status = polled.game_status.get("winStatus")
        ctx.metrics.round_delay.add(_elapsed_ms(round_start_ns), tags)
        n += 1

    await ctx.delays.delay_range(*FINISH_ANIMATION_RANGE_SEC)
    result = await ctx.backend.post_game_event(game_id, ClientEventType.ACK_RESULT)
    ctx.metrics.live_game_duration.add(_elapsed_ms(game_start_ns), tags)
    ctx.logger.debug(lambda: f"VU {state.ordinal}: {win_status}")
    return result


async def play_random_level(ctx: ActionContext) -> RequestResult:
    """Play a live game at a random level the user can afford and has unlocked."""
    state = ctx.state
    ctx.logger.info(lambda: f"VU {state.ordinal}: Play random level...")
    if state.user is None:
        return _invariant_failure(ctx, "No user!")
    for _ in range(MAX_LEVEL_PICKS):
        level = pick_level(state, ctx.rng)
        if (
            level < len(state.levels)
            and state.user.rank >= state.levels[level].unlocks_at_rank
        ):
            return await play_level(ctx, UserPlaySessionType.LIVE, level)
    return _invariant_failure(
        ctx, f"No unlocked level found for rank {state.user.rank} in {len(state.levels)} levels"
    )


async def unload_game(ctx: ActionContext) -> RequestResult:
    """Refresh what the client reloads when leaving a game."""
    backend = ctx.backend
    await backend.get_config(ConfigType.TOWER_DATA)
    await backend.get_config(ConfigType.APP_DATA)
    await backend.get_user()
    await backend.get_config(ConfigType.CHARITY_DATA)
    await backend.get_special_events()
    await backend.get_user("all")
    return await backend.find_user(ctx.state.opponent_username)

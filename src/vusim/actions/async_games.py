# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Asynchronous (turn based) challenges between two users.

Actions that can end a completed game hand control to an `on_game_over`
callback, which lets the calling screen offer a rematch.
"""

from collections.abc import Awaitable, Callable

from vusim.actions.context import ActionContext
from vusim.actions.live_games import LOAD_RANGE_SEC, pick_level, unload_game
from vusim.actions.moves import begin_round_timer, game_from, make_move
from vusim.actions.outcomes import check_response, log_rank_details, to_outcome
from vusim.common.enums import ClientEventType, GameStatus, UserPlaySessionType
from vusim.common.models import PlaySession, RequestResult
from vusim.dispatch import CONTINUE, FATAL_ABORT, HANDLED_ERROR, NO_OP, ActionOutcome

GameOverHandler = Callable[[str | None], Awaitable[ActionOutcome]]


def _tags(game_type: str | None, session: PlaySession) -> dict[str, str]:
    return {"game": game_type or "", "level": str(session.requested_level)}


async def load_async_game(ctx: ActionContext, game_id: str | None) -> RequestResult:
    await ctx.delays.delay_range(*LOAD_RANGE_SEC)
    return await ctx.backend.post_game_event(game_id, ClientEventType.FINISHED_LOADING)


async def issue_challenge(ctx: ActionContext, opponent_username: str | None) -> ActionOutcome:
    """Challenge `opponent_username` and play the first move."""
    state = ctx.state
    user = state.user
    if user is not None and user.has_open_session_against(opponent_username):
        return NO_OP

    level = pick_level(state, ctx.rng)
    ctx.logger.debug(
        lambda: f"VU {state.ordinal}: Issuing challenge to {opponent_username} at level {level}..."
    )
    result = await ctx.backend.request_match(
        UserPlaySessionType.CHALLENGE, level, opponent_username
    )
    outcome = check_response(ctx, result, "request_match")
    if outcome is not None:
        log_rank_details(ctx, result, f"level: {level}")
        return outcome

    data = result.data if isinstance(result.data, dict) else {}
    state.set_user(data.get("user"))
    session_id = data.get("sessionId")
    session = next(
        (s for s in (state.user.sessions if state.user else []) if s.id == session_id),
        None,
    )
    if session is None:
        ctx.logger.error(
            f"VU {state.ordinal}: issue_challenge({opponent_username}): "
            f"session {session_id} not found after request_match!"
        )
        return HANDLED_ERROR

    ctx.logger.debug(
        lambda: f"VU {state.ordinal}: Starting challenge with {opponent_username}, "
        f"session {session_id}, game {session.game}"
    )
    result = await load_async_game(ctx, session.game)
    outcome = check_response(ctx, result, "load_async_game")
    if outcome is not None:
        return outcome
    game = game_from(result)
    if game is None:
        ctx.logger.error(f"VU {state.ordinal}: no game returned for session {session_id}")
        return HANDLED_ERROR
    state.opponent_username = opponent_username

    result = await begin_round_timer(ctx, game)
    outcome = check_response(ctx, result, "begin_round_timer")
    if outcome is not None:
        return outcome
    result = await make_move(ctx, game_from(result) or game)
    outcome = check_response(ctx, result, "make_move")
    if outcome is not None:
        return outcome

    await unload_game(ctx)
    ctx.metrics.async_game_starts.add(1, _tags(game.type, session))
    return to_outcome(result)


async def accept_challenge(ctx: ActionContext, session: PlaySession) -> ActionOutcome:
    if not ctx.state.has_account(session.matched_level_value):
        return NO_OP
    result = await ctx.backend.accept_match(session.id)
    outcome = check_response(ctx, result, "accept_match")
    if outcome is not None:
        return outcome
    ctx.metrics.async_game_accepts.add(1, _tags(session.game_type, session))
    return CONTINUE


async def decline_challenge(ctx: ActionContext, session: PlaySession) -> ActionOutcome:
    result = await ctx.backend.decline_match(session.id)
    outcome = check_response(ctx, result, "decline_match")
    if outcome is not None:
        return outcome
    ctx.metrics.async_game_declines.add(1, _tags(session.game_type, session))
    return CONTINUE


async def acknowledge_match(ctx: ActionContext, session: PlaySession) -> ActionOutcome:
    result = await ctx.backend.acknowledge_match(session.id)
    outcome = check_response(ctx, result, "acknowledge_match")
    return outcome if outcome is not None else CONTINUE


async def make_async_move(
    ctx: ActionContext, session: PlaySession, on_game_over: GameOverHandler
) -> ActionOutcome:
    """Take a turn, or acknowledge the result if the game has ended meanwhile."""
    state = ctx.state
    result = await load_async_game(ctx, session.game)
    outcome = check_response(ctx, result, "load_async_game")
    if outcome is not None:
        return outcome
    game = game_from(result)
    if game is None:
        ctx.logger.error(f"VU {state.ordinal}: no game returned for session {session.id}")
        return HANDLED_ERROR
    state.opponent_username = session.opponent_username

    completed = game.status == GameStatus.GAME_COMPLETE
    if completed:
        result = await ctx.backend.post_game_event(game.id, ClientEventType.ACK_RESULT)
        outcome = check_response(ctx, result, "post_game_event", only_fatal=True)
        if outcome is not None:
            return outcome
        result = await ctx.backend.acknowledge_match(session.id)
        outcome = check_response(ctx, result, "acknowledge_match", only_fatal=True)
        if outcome is not None:
            return outcome
        if result.error is None:
            ctx.metrics.async_game_completes.add(1, _tags(game.type, session))
    else:
        result = await begin_round_timer(ctx, game)
        outcome = check_response(ctx, result, "begin_round_timer", only_fatal=True)
        if outcome is not None:
            return outcome
        if result.error is None:
            result = await make_move(ctx, game_from(result) or game)
            outcome = check_response(ctx, result, "make_move", only_fatal=True)
            if outcome is not None:
                return outcome
            if result.error is None:
                ctx.metrics.async_game_moves.add(1, _tags(game.type, session))

    await unload_game(ctx)
    if completed:
        return await on_game_over(session.opponent_username)
    return CONTINUE


async def see_result(
    ctx: ActionContext, session: PlaySession, on_game_over: GameOverHandler
) -> ActionOutcome:
    """Open a finished game, acknowledge its result and offer a rematch."""
    state = ctx.state
    result = await load_async_game(ctx, session.game)
    outcome = check_response(ctx, result, "load_async_game")
    if outcome is not None:
        return outcome
    game = game_from(result)
    state.opponent_username = session.opponent_username

    if game is not None:
        result = await ctx.backend.post_game_event(game.id, ClientEventType.ACK_RESULT)
        if result.error is None:
            ctx.metrics.async_game_completes.add(1, _tags(game.type, session))
    result = await ctx.backend.acknowledge_match(session.id)
    outcome = check_response(ctx, result, "acknowledge_match", only_fatal=True)
    if outcome is not None:
        return outcome

    await unload_game(ctx)
    if game is not None and game.status == GameStatus.GAME_COMPLETE:
        return await on_game_over(session.opponent_username)
    ctx.logger.error(
        f"VU {state.ordinal}: Fatal error! see_result: game of session {session.id} "
        f"is not complete (status={game.status if game else None})"
    )
    return FATAL_ABORT

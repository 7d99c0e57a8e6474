# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Round by round game play shared by live and asynchronous games."""

import random
from typing import Any

from vusim.actions.context import ActionContext
from vusim.common.enums import ClientEventType, GameType
from vusim.common.exceptions import InvalidStateError
from vusim.common.models import GameSnapshot, RequestResult

MOVE_THINK_RANGE_SEC = (1.0, 10.0)
CRYSTAL_CAVERNS_BUTTONS = (1, 2, 3)


def game_from(result: RequestResult) -> GameSnapshot | None:
    """The game document of a response, or None if it carries no game state yet."""
    data = result.data
    if not isinstance(data, dict) or "id" not in data:
        return None
    return GameSnapshot.model_validate(data)


def has_game_state(result: RequestResult) -> bool:
    data = result.data
    return isinstance(data, dict) and bool(data.get("data"))


def choose_move(game: GameSnapshot, rng: random.Random) -> Any:
    """Pick a random legal answer for the current round.

    Raises:
        InvalidStateError: If the game type is not one the simulation can play.
    """
    player_state = game.player_state
    if game.type == GameType.MONKEY_BUSINESS:
        water = player_state.get("water") or 0
        return round(rng.uniform(0, water))
    if game.type == GameType.CRYSTAL_CAVERNS:
        return rng.choice(CRYSTAL_CAVERNS_BUTTONS)
    if game.type in (GameType.MAGNET_MADNESS, GameType.BLASTEROIDS):
        buttons = player_state.get("buttons") or []
        active = [b.get("value") for b in buttons if b.get("isActive")]
        return rng.choice(active) if active else None
    raise InvalidStateError(f"Unknown game type {game.type} in make_move")


async def begin_round_timer(ctx: ActionContext, game: GameSnapshot) -> RequestResult:
    """Start the current round, polling until the backend returns the game state."""
    round_number = game.round_number
    if round_number is None:
        message = f"currentRoundData.roundNumber is missing in game {game.id}"
        ctx.logger.error(message)
        return RequestResult.failure(message)

    result = RequestResult()
    first = True
    while not has_game_state(result):
        if not first:
            await ctx.delays.polling_delay()
        first = False
        result = await ctx.backend.post_game_event(
            game.id, ClientEventType.BEGIN_ROUND_TIMER, {"round": round_number}
        )
        if result.error is not None:
            return result
    return result


async def make_move(ctx: ActionContext, game: GameSnapshot) -> RequestResult:
    await ctx.delays.delay_range(*MOVE_THINK_RANGE_SEC)
    answer = choose_move(game, ctx.rng)
    ctx.logger.debug(lambda: f"VU {ctx.state.ordinal}: move {answer} in {game.type}")
    result = await ctx.backend.post_game_answer(game.id, game.round_number, answer)
    if result.error is not None:
        ctx.logger.error(
            f"VU {ctx.state.ordinal}: error submitting game answer: {result.error}"
        )
    return result

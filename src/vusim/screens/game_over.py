# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Playing a game from a screen and the game over prompt that follows it."""

from vusim.actions.live_games import play_level, play_random_level, unload_game
from vusim.common.enums import LeaderboardType, UserPlaySessionType
from vusim.dispatch import CONTINUE, FATAL_ABORT, Action, ActionOutcome
from vusim.screens.runner import Screen

HOME_GAME_OVER = "home_game_over"
ARCADE_GAME_OVER = "arcade_game_over"
GAME_OVER_WEIGHTS = {"matchup_against": 10.0, "back": 90.0}


async def game_over(
    screen: Screen, dispatcher_name: str, opponent_username: str | None
) -> ActionOutcome:
    """Offer a rematch against a human opponent, otherwise go back to `screen`."""
    ctx = screen.ctx

    async def back() -> ActionOutcome:
        return CONTINUE

    actions = [
        Action(
            "matchup_against",
            GAME_OVER_WEIGHTS["matchup_against"],
            lambda: screen.runner.open("pvp", opponent_username),
            condition=lambda: not ctx.state.opponent_is_bot,
        ),
        Action("back", GAME_OVER_WEIGHTS["back"], back),
    ]
    return await screen.runner.make_dispatcher(dispatcher_name, actions).dispatch()


async def play_random_live(screen: Screen) -> ActionOutcome:
    """Play a live game from the home tower."""
    ctx = screen.ctx
    result = await play_random_level(ctx)
    if result.cancelled:
        return CONTINUE
    if result.error is not None:
        return FATAL_ABORT
    await unload_game(ctx)
    await ctx.backend.get_leaderboard(LeaderboardType.SURGE_SCORE)
    return await game_over(screen, HOME_GAME_OVER, ctx.state.opponent_username)


async def play_arcade(screen: Screen) -> ActionOutcome:
    """Play a practice game. The backend picks the game type."""
    ctx = screen.ctx
    result = await play_level(ctx, UserPlaySessionType.ARCADE, 0)
    if result.cancelled:
        return CONTINUE
    if result.error is not None:
        return FATAL_ABORT
    await unload_game(ctx)
    return await game_over(screen, ARCADE_GAME_OVER, ctx.state.opponent_username)


def async_game_over(screen: Screen):
    """The `on_game_over` callback handed to the asynchronous game actions."""

    async def on_game_over(opponent_username: str | None) -> ActionOutcome:
        return await game_over(screen, ARCADE_GAME_OVER, opponent_username)

    return on_game_over

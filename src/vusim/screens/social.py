# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The social (matchups) tab and the player-versus-player screen."""

import math
from collections.abc import Iterable

from vusim.actions.async_games import (
    accept_challenge,
    acknowledge_match,
    decline_challenge,
    issue_challenge,
    make_async_move,
    see_result,
)
from vusim.actions.outcomes import is_fatal, to_outcome
from vusim.common.enums import UserPlaySessionStatus
from vusim.common.identity_utils import number_from_phone, username_from_number
from vusim.common.models import PlaySession, RequestResult
from vusim.dispatch import CONTINUE, FATAL_ABORT, HANDLED_ERROR, NO_OP, ActionOutcome
from vusim.screens.game_over import async_game_over
from vusim.screens.runner import MENU_BAR_WEIGHT, ActionSpec, Screen, ScreenRunner

IDLE_RANGE_SEC = (5.0, 45.0)
BROWSE_CHALLENGEES_PERCENT = 50


class SocialScreen(Screen):
    name = "social"
    dispatcher_name = "social_screen"
    metric_name = "social_screen"
    menu_bar_weight = MENU_BAR_WEIGHT
    requires_async_play = True

    def __init__(self, runner: ScreenRunner) -> None:
        super().__init__(runner)
        self.challengees: list[str] = []

    async def update(self) -> RequestResult:
        backend = self.ctx.backend
        result = await backend.get_user()
        if is_fatal(result.error):
            return result
        result = await backend.find_challengees()
        if result.error is None and isinstance(result.data, dict):
            self.challengees = [
                user["username"]
                for user in result.data.get("users") or []
                if user.get("username")
            ]
        return result

    async def on_enter(self) -> ActionOutcome | None:
        await self.update()
        return None

    async def after_dispatch(self, outcome: ActionOutcome) -> ActionOutcome | None:
        if is_fatal((await self.update()).error):
            return FATAL_ABORT
        return None

    async def search_for_user(self) -> ActionOutcome:
        """Look up a random user with a lower number than this one."""
        n = number_from_phone(self.ctx.state.phone)
        if n < 2:
            return NO_OP
        opponent = username_from_number(math.floor(max(1, (n - 1) * self.ctx.rng.random())))
        return await self.runner.open("pvp", opponent)

    async def idle(self) -> ActionOutcome:
        await self.ctx.delays.delay_range(*IDLE_RANGE_SEC)
        return to_outcome(await self.update())

    async def matchup_action(self) -> ActionOutcome:
        """Attend to the most urgent matchup, or browse a possible challengee."""
        ctx = self.ctx
        user = ctx.state.user
        if user is not None:
            session = user.async_session_with_status(
                UserPlaySessionStatus.PLAYING, only_requires_action=True
            )
            if session is not None:
                ctx.logger.debug("Make move...")
                return await make_async_move(ctx, session, async_game_over(self))
            session = user.async_session_with_status(UserPlaySessionStatus.COMPLETED)
            if session is not None:
                ctx.logger.debug("See result...")
                return await see_result(ctx, session, async_game_over(self))
            session = user.async_session_with_status(UserPlaySessionStatus.CHALLENGE_RECEIVED)
            if session is not None:
                ctx.logger.debug("Go to PvP...")
                return await self.runner.open("pvp", session.opponent_username)
            session = user.async_session_with_status(UserPlaySessionStatus.CHALLENGE_REJECTED)
            if session is not None:
                ctx.logger.debug("Acknowledge declined...")
                return await acknowledge_match(ctx, session)

        # The opponent is to move
        choice = round(100 * ctx.rng.random())
        if choice <= BROWSE_CHALLENGEES_PERCENT and self.challengees:
            opponent = ctx.rng.choice(self.challengees)
            if user is None or user.async_session_against(opponent) is None:
                ctx.logger.debug("Go to PvP...")
                return await self.runner.open("pvp", opponent)
        return CONTINUE

    actions = (
        ActionSpec("search_for_user", 10, search_for_user),
        ActionSpec("idle", 10, idle),
        ActionSpec("matchup_action", 50, matchup_action),
    )


class PvPScreen(Screen):
    """Another user's profile, with the one matchup action their session allows."""

    name = "pvp"
    dispatcher_name = "pvp_screen"
    metric_name = "pvp_screen"
    overlay = True
    single_action = True
    requires_async_play = True

    def __init__(self, runner: ScreenRunner, opponent_username: str | None) -> None:
        super().__init__(runner)
        self.opponent_username = opponent_username
        user = self.ctx.state.user
        self.session: PlaySession | None = (
            user.async_session_against(opponent_username) if user else None
        )

    async def on_enter(self) -> ActionOutcome | None:
        ctx = self.ctx
        if not self.opponent_username:
            ctx.logger.error(f"VU {ctx.state.ordinal}: PvP screen without an opponent")
            return HANDLED_ERROR
        result = await ctx.backend.find_user(self.opponent_username)
        if is_fatal(result.error):
            return FATAL_ABORT
        if result.error is not None or not result.data:
            return HANDLED_ERROR
        result = await ctx.backend.get_stats(self.opponent_username)
        if is_fatal(result.error):
            return FATAL_ABORT
        return None

    def matchup_actions(self) -> list[str]:
        session = self.session
        if session is None:
            return ["start_challenge"]
        if session.status == UserPlaySessionStatus.CHALLENGE_RECEIVED:
            return ["accept", "reject"]
        if session.status == UserPlaySessionStatus.PLAYING:
            return ["move"] if session.requires_action else []
        if session.status == UserPlaySessionStatus.CHALLENGE_REJECTED:
            return ["ack_rejected"]
        if session.status == UserPlaySessionStatus.COMPLETED:
            return ["see_result"]
        # Any other status: the matchup button is disabled
        return []

    def action_specs(self) -> Iterable[ActionSpec]:
        specs = {spec.name: spec for spec in self.actions}
        yield specs["back"]
        for name in self.matchup_actions():
            yield specs[name]

    async def start_challenge(self) -> ActionOutcome:
        return await issue_challenge(self.ctx, self.opponent_username)

    async def accept(self) -> ActionOutcome:
        return await accept_challenge(self.ctx, self.session)

    async def reject(self) -> ActionOutcome:
        return await decline_challenge(self.ctx, self.session)

    async def move(self) -> ActionOutcome:
        return await make_async_move(self.ctx, self.session, async_game_over(self))

    async def ack_rejected(self) -> ActionOutcome:
        return await acknowledge_match(self.ctx, self.session)

    async def view_result(self) -> ActionOutcome:
        return await see_result(self.ctx, self.session, async_game_over(self))

    actions = (
        ActionSpec("back", 25, Screen.back),
        ActionSpec("start_challenge", 75, start_challenge),
        ActionSpec("accept", 37.5, accept),
        ActionSpec("reject", 37.5, reject),
        ActionSpec("move", 75, move),
        ActionSpec("ack_rejected", 75, ack_rejected),
        ActionSpec("see_result", 75, view_result),
    )
    """Every action of the screen. Only `back` and the matchup actions allowed
    by the session are offered."""

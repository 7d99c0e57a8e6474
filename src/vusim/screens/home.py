# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The home tab (live game tower) and its Power Play settings overlay."""

import math

from vusim.actions.account import has_spins, home_spinner, refresh_progress_trackers
from vusim.actions.outcomes import ok_or_back_or_error
from vusim.common.enums import LeaderboardType, SpecialEventType
from vusim.common.models import SpecialEvent, SpecialEventSequence
from vusim.dispatch import NO_OP, SUSPEND, ActionOutcome
from vusim.screens.game_over import play_random_live
from vusim.screens.runner import MENU_BAR_WEIGHT, ActionSpec, Screen, ScreenRunner

SPIN_FAILURE_COOLDOWN_SEC = 300.0


def featured_event(data: object) -> SpecialEvent | None:
    """The event the home screen banner shows, from a `special_events` listing."""
    if not isinstance(data, dict):
        return None
    sequence = SpecialEventSequence.model_validate(data)
    if not sequence.current:
        return None
    return next((e for e in sequence.current if e.is_featured), sequence.current[0])


class HomeScreen(Screen):
    name = "home"
    dispatcher_name = "home_screen"
    metric_name = "home_screen"
    menu_bar_weight = MENU_BAR_WEIGHT
    responds_to_alerts = True

    def __init__(self, runner: ScreenRunner) -> None:
        super().__init__(runner)
        self.current_event_id: str | None = None

    async def on_enter(self) -> ActionOutcome | None:
        await refresh_progress_trackers(self.ctx)
        await self.update_featured_events()
        return None

    async def before_dispatch(self) -> ActionOutcome | None:
        ctx = self.ctx
        user = ctx.state.user
        if user is None or user.account >= 1 or not has_spins(ctx):
            return None
        result = await home_spinner(ctx)
        if result.error is None:
            return None
        ctx.logger.error(f"VU {ctx.state.ordinal}: Spin failed: {result.error}")
        await ctx.delays.delay(SPIN_FAILURE_COOLDOWN_SEC)
        return SUSPEND

    async def after_dispatch(self, outcome: ActionOutcome) -> ActionOutcome | None:
        if outcome != NO_OP:
            await self.update_featured_events()
        return None

    async def update_featured_events(self) -> None:
        """Refresh the featured event banner and its leaderboard when it changes.

        Surge events are live scores, so their leaderboard is always refreshed.
        """
        backend = self.ctx.backend
        result = await backend.get_special_events()
        await backend.get_active_count()
        if result.error is not None:
            return
        event = featured_event(result.data)
        if event is None:
            return
        is_surge = event.type == SpecialEventType.SURGE
        if event.id == self.current_event_id and not is_surge:
            return
        self.current_event_id = event.id
        leaderboard = LeaderboardType.SURGE_SCORE if is_surge else LeaderboardType.AD_HOC_SCORE
        await backend.get_leaderboard(leaderboard, event.id)

    async def power_play_settings(self) -> ActionOutcome:
        return await self.runner.open("power_play_settings")

    actions = (
        ActionSpec("play_random", 70, play_random_live),
        ActionSpec("power_play_settings", 5, power_play_settings),
    )


class PowerPlaySettingsScreen(Screen):
    """Matchmaking level preferences.

    Turning Power Play on is more likely than turning it off, and turning it
    off is more likely to be followed by leaving the screen.
    """

    name = "power_play_settings"
    dispatcher_name = "power_play_settings_screen"
    metric_name = "powerplay_settings_screen"
    overlay = True
    requires_user = True

    def __init__(self, runner: ScreenRunner) -> None:
        super().__init__(runner)
        state = self.ctx.state
        profile = state.user.profile if state.user else None
        self.active = bool(profile and profile.use_default_matchmaking_level)
        self.minimum = profile.lowest_matchmaking_level if profile else 0
        # The backend reports "no maximum" as a very large level
        default_level = profile.default_matchmaking_level if profile else None
        self.maximum = min(default_level or state.max_level, state.max_level)

    async def on_enter(self) -> ActionOutcome | None:
        state = self.ctx.state
        if state.user is not None and state.user.profile is None:
            self.ctx.logger.error(f"VU {state.ordinal}: Profile undefined: user={state.user}")
        return None

    async def on_leave(self, outcome: ActionOutcome) -> ActionOutcome:
        # The home screen reloads the events listing when it reappears
        await self.ctx.backend.get_special_events()
        return await super().on_leave(outcome)

    async def toggle_active(self) -> ActionOutcome:
        ctx = self.ctx
        self.active = not self.active
        result = await ctx.backend.update_profile(useDefaultMatchmakingLevel=self.active)
        return ok_or_back_or_error(result, 50 if self.active else 90, ctx.rng)

    async def set_minimum(self) -> ActionOutcome:
        ctx = self.ctx
        upper = max(0, math.trunc(self.maximum / 2))
        self.minimum = math.trunc(ctx.delays.random_in_range(0, upper))
        result = await ctx.backend.update_profile(lowestMatchmakingLevel=self.minimum)
        return ok_or_back_or_error(result, 75, ctx.rng)

    async def set_maximum(self) -> ActionOutcome:
        ctx = self.ctx
        max_level = ctx.state.max_level
        lower = min(self.minimum * 2, self.maximum)
        self.maximum = math.trunc(ctx.delays.random_in_range(lower, max_level))
        result = await ctx.backend.update_profile(defaultMatchmakingLevel=self.maximum)
        return ok_or_back_or_error(result, 75, ctx.rng)

    def is_active(self) -> bool:
        return self.active

    actions = (
        ActionSpec("back", 25, Screen.back),
        ActionSpec("toggle_active", lambda s: 10 if s.active else 90, toggle_active),
        ActionSpec("set_minimum", 25, set_minimum, is_active),
        ActionSpec("set_maximum", 25, set_maximum, is_active),
    )

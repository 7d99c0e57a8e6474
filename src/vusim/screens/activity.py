# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The activity tab: leaderboards and the winnings feed."""

from typing import Any

from vusim.actions.outcomes import check_response, is_fatal, ok_or_error
from vusim.common.enums import FeedType, LeaderboardType
from vusim.dispatch import (
    CONTINUE,
    FATAL_ABORT,
    HANDLED_ERROR,
    NO_OP,
    ActionOutcome,
)
from vusim.screens.runner import ActionSpec, Screen, ScreenRunner

ACTIVITY_MENU_BAR_WEIGHT = 46.0
IDLE_RANGE_SEC = (5.0, 20.0)
REPLAY_RANGE_SEC = (10.0, 300.0)

# Action name -> leaderboard shown by the activity tab
ACTIVITY_LEADERBOARDS = {
    "winnings_today": LeaderboardType.WINNINGS_TODAY,
    "winnings_yesterday": LeaderboardType.WINNINGS_YESTERDAY,
    "winnings_this_week": LeaderboardType.WINNINGS_THIS_WEEK,
    "winnings_last_week": LeaderboardType.WINNINGS_LAST_WEEK,
    "highest_balance": LeaderboardType.HIGHEST_BALANCE,
    "current_balance": LeaderboardType.CURRENT_BALANCE,
    "most_donated": LeaderboardType.MOST_DONATED,
    "surge": LeaderboardType.SURGE_SCORE,
}


def _show_leaderboard(leaderboard_type: LeaderboardType):
    async def show(screen: Screen) -> ActionOutcome:
        return ok_or_error(await screen.ctx.backend.get_leaderboard(leaderboard_type))

    return show


class ActivityScreen(Screen):
    name = "activity"
    dispatcher_name = "activity_screen"
    metric_name = "activity_screen"
    menu_bar_weight = ACTIVITY_MENU_BAR_WEIGHT
    responds_to_alerts = True

    async def on_enter(self) -> ActionOutcome | None:
        outcome = ok_or_error(await self.ctx.backend.get_activity_feed(FeedType.WINNINGS))
        return outcome if outcome.leaves_screen else None

    async def feed(self) -> ActionOutcome:
        return await self.runner.open("feed", FeedType.WINNINGS)

    actions = (
        ActionSpec("feed", 6, feed),
        *(
            ActionSpec(action_name, 6, _show_leaderboard(leaderboard_type))
            for action_name, leaderboard_type in ACTIVITY_LEADERBOARDS.items()
        ),
    )


class FeedScreen(Screen):
    """A feed of finished games, some of which can be watched as replays."""

    name = "feed"
    dispatcher_name = "feed_tab"
    overlay = True

    def __init__(
        self, runner: ScreenRunner, feed_type: FeedType, event_id: str | None = None
    ) -> None:
        super().__init__(runner)
        self.feed_type = feed_type
        self.event_id = event_id
        self.items: list[dict[str, Any]] = []

    async def on_enter(self) -> ActionOutcome | None:
        result = await self.ctx.backend.get_activity_feed(self.feed_type, self.event_id)
        outcome = check_response(self.ctx, result, "feeds/activity", only_fatal=True)
        if outcome is not None:
            return outcome
        if result.error is not None:
            return HANDLED_ERROR
        if isinstance(result.data, list):
            self.items = [item for item in result.data if isinstance(item, dict)]
        return None

    async def idle(self) -> ActionOutcome:
        await self.ctx.delays.delay_range(*IDLE_RANGE_SEC)
        return CONTINUE

    async def watch_replay(self) -> ActionOutcome:
        ctx = self.ctx
        if not self.items:
            return NO_OP
        item = ctx.rng.choice(self.items)
        result = await ctx.backend.watch_game(item.get("gameId"))
        if is_fatal(result.error):
            return FATAL_ABORT
        if result.error is not None:
            return HANDLED_ERROR
        ctx.metrics.replays_watched.add(1)
        # Long enough to watch a whole game, or give up early
        await ctx.delays.delay_range(*REPLAY_RANGE_SEC)
        return CONTINUE

    actions = (
        ActionSpec("back", 25, Screen.back),
        ActionSpec("idle", 50, idle),
        ActionSpec("watch_replay", 25, watch_replay),
    )

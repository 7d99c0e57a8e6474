# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""The goals (arcade) tab: goal awards and practice games."""

from vusim.actions.account import claim_goal_awards, refresh_progress_trackers
from vusim.actions.outcomes import ok_or_error
from vusim.dispatch import ActionOutcome
from vusim.screens.game_over import play_arcade
from vusim.screens.runner import MENU_BAR_WEIGHT, ActionSpec, Screen


class GoalsScreen(Screen):
    name = "goals"
    dispatcher_name = "goals_screen"
    metric_name = "goals_screen"
    menu_bar_weight = MENU_BAR_WEIGHT
    responds_to_alerts = True

    async def on_enter(self) -> ActionOutcome | None:
        await self.ctx.backend.get_special_events()
        await refresh_progress_trackers(self.ctx)
        return None

    async def after_dispatch(self, outcome: ActionOutcome) -> ActionOutcome | None:
        await refresh_progress_trackers(self.ctx)
        return None

    async def claim(self) -> ActionOutcome:
        return ok_or_error(await claim_goal_awards(self.ctx))

    actions = (
        ActionSpec("claim", 35, claim),
        ActionSpec("practice", 35, play_arcade),
    )

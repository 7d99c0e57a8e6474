# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Screens opened from the menu bar. Each performs a single action and closes."""

from vusim.actions.account import cash_out, home_spinner, set_inviter
from vusim.actions.outcomes import ok_or_back_or_error, ok_or_error
from vusim.dispatch import NO_OP, ActionOutcome
from vusim.screens.runner import ActionSpec, Screen, ScreenRunner

CASH_OUT_MIN_BALANCE = 1000


def can_cash_out(screen: Screen) -> bool:
    return screen.ctx.state.has_account(CASH_OUT_MIN_BALANCE)


async def do_cash_out(screen: Screen) -> ActionOutcome:
    return ok_or_error(await cash_out(screen.ctx))


class SettingsScreen(Screen):
    name = "settings"
    dispatcher_name = "settings_screen"
    metric_name = "settings_screen"
    overlay = True
    single_action = True
    requires_user = True

    def __init__(self, runner: ScreenRunner) -> None:
        super().__init__(runner)
        user = self.ctx.state.user
        self.exclude_bots = bool(user and user.profile and user.profile.exclude_bots)

    async def on_enter(self) -> ActionOutcome | None:
        state = self.ctx.state
        if state.user is not None and state.user.profile is None:
            self.ctx.logger.error(f"VU {state.ordinal}: Profile undefined: user={state.user}")
        return None

    async def name_inviter(self) -> ActionOutcome:
        result = await set_inviter(self.ctx)
        return NO_OP if result is None else ok_or_error(result)

    async def recent_games(self) -> ActionOutcome:
        return ok_or_error(await self.ctx.backend.get_recent_games())

    async def toggle_include_bots(self) -> ActionOutcome:
        ctx = self.ctx
        self.exclude_bots = not self.exclude_bots
        result = await ctx.backend.update_profile(excludeBots=self.exclude_bots)
        return ok_or_back_or_error(result, 75, ctx.rng)

    async def power_play_settings(self) -> ActionOutcome:
        return await self.runner.open("power_play_settings")

    actions = (
        ActionSpec("back", 25, Screen.back),
        ActionSpec("cash_out", 10, do_cash_out, can_cash_out),
        ActionSpec("set_inviter", 25, name_inviter),
        ActionSpec("recent_games", 25, recent_games),
        # Turning bots back on is far more likely than turning them off
        ActionSpec(
            "toggle_include_bots", lambda s: 80 if s.exclude_bots else 5, toggle_include_bots
        ),
        ActionSpec("power_play_settings", 25, power_play_settings),
    )


class WalletScreen(Screen):
    name = "wallet"
    dispatcher_name = "wallet_details_screen"
    overlay = True
    single_action = True
    requires_user = True

    async def spin(self) -> ActionOutcome:
        return ok_or_error(await home_spinner(self.ctx))

    actions = (
        ActionSpec("back", 25, Screen.back),
        ActionSpec("cash_out", 10, do_cash_out, can_cash_out),
        ActionSpec("spin", 65, spin),
    )

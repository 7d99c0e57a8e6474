# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Generic screen loop shared by every screen of the simulated client.

A screen is declared as data: its name, flags and a table of
:class:`ActionSpec` entries. :class:`ScreenRunner` turns one activation of a
screen into a dispatcher and runs the loop::

    guard re-entry -> on_enter -> repeat:
        think -> check ramp-down -> before_dispatch -> dispatch -> after_dispatch

until an outcome leaves the screen.
"""

from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any, ClassVar

from vusim.actions import ActionContext
from vusim.common.enums import UserPlaySessionStatus
from vusim.dispatch import (
    CONTINUE,
    FINISHED,
    LEAVE_SCREEN,
    NO_OP,
    Action,
    ActionOutcome,
    Dispatcher,
    jump_to,
)

MENU_BAR_WEIGHT = 30.0
"""Default total weight of the menu bar entries embedded in a tab screen."""

SOCIAL_SCREEN = "social"


@dataclass(frozen=True, slots=True)
class ActionSpec:
    """One row of a screen's action table.

    `weight` may be a callable evaluated against the screen when it is
    activated. `handler` and `condition` are called with the screen instance.
    """

    name: str
    weight: "float | Callable[[Screen], float]"
    handler: "Callable[[Screen], Awaitable[ActionOutcome]]"
    condition: "Callable[[Screen], bool] | None" = None


class Screen:
    """One activation of a screen of the simulated client.

    Class attributes describe the screen. Hooks return None to carry on, or an
    outcome the loop must return.
    """

    name: ClassVar[str]
    dispatcher_name: ClassVar[str | None] = None
    metric_name: ClassVar[str | None] = None
    actions: ClassVar[tuple[ActionSpec, ...]] = ()
    menu_bar_weight: ClassVar[float | None] = None
    """Total weight of the embedded menu bar, or None for screens without one."""
    overlay: ClassVar[bool] = False
    """Shown on top of a parent screen: leaving returns to the parent's loop."""
    single_action: ClassVar[bool] = False
    requires_user: ClassVar[bool] = False
    requires_async_play: ClassVar[bool] = False
    no_repeats: ClassVar[bool] = False
    responds_to_alerts: ClassVar[bool] = False
    """Jump to the social screen after a dispatch when a challenge awaits the user."""

    def __init__(self, runner: "ScreenRunner") -> None:
        self.runner = runner
        self.ctx: ActionContext = runner.ctx

    # =========================================================================
    # Hooks
    # =========================================================================

    async def on_enter(self) -> ActionOutcome | None:
        return None

    async def before_dispatch(self) -> ActionOutcome | None:
        return None

    async def after_dispatch(self, outcome: ActionOutcome) -> ActionOutcome | None:
        return None

    def pending_alert(self) -> ActionOutcome | None:
        config = self.ctx.config
        user = self.ctx.state.user
        if not (config.play_async and config.respond_to_alerts) or user is None:
            return None
        if user.async_session_with_status(
            UserPlaySessionStatus.CHALLENGE_RECEIVED
        ) or user.async_session_with_status(
            UserPlaySessionStatus.PLAYING, only_requires_action=True
        ):
            return jump_to(SOCIAL_SCREEN)
        return None

    async def on_leave(self, outcome: ActionOutcome) -> ActionOutcome:
        # Leaving an overlay must not make the parent screen switch tabs
        if self.overlay and outcome == LEAVE_SCREEN:
            return CONTINUE
        return outcome

    # =========================================================================
    # Action table
    # =========================================================================

    def action_specs(self) -> Iterable[ActionSpec]:
        if self.menu_bar_weight is not None:
            yield from MENU_BAR
        yield from self.actions

    def build_actions(self) -> list[Action]:
        actions = []
        for spec in self.action_specs():
            weight = spec.weight(self) if callable(spec.weight) else spec.weight
            actions.append(
                Action(
                    name=spec.name,
                    weight=weight,
                    body=partial(spec.handler, self),
                    condition=partial(spec.condition, self) if spec.condition else None,
                )
            )
        return actions

    # =========================================================================
    # Menu bar
    # =========================================================================

    def menu_bar_share(self, entry: str) -> float:
        return (self.menu_bar_weight or 0.0) * self.ctx.config.menu_bar_split[entry]

    async def back(self) -> ActionOutcome:
        return LEAVE_SCREEN

    async def open_settings(self) -> ActionOutcome:
        return await self.runner.open("settings")

    async def open_wallet(self) -> ActionOutcome:
        return await self.runner.open("wallet")


MENU_BAR = (
    ActionSpec("new_tab", lambda s: s.menu_bar_share("new_tab"), Screen.back),
    ActionSpec("settings", lambda s: s.menu_bar_share("settings"), Screen.open_settings),
    ActionSpec(
        "wallet_details", lambda s: s.menu_bar_share("wallet_details"), Screen.open_wallet
    ),
)


class ScreenRunner:
    """Runs screens for one virtual user.

    Args:
        ctx: The virtual user's action context.
        screens: Screen classes by screen name, used by :meth:`open`.
    """

    def __init__(
        self, ctx: ActionContext, screens: Mapping[str, type[Screen]]
    ) -> None:
        self.ctx = ctx
        self.screens = screens

    def make_dispatcher(
        self, name: str, actions: Iterable[Action], no_repeats: bool = False
    ) -> Dispatcher:
        config = self.ctx.config
        return Dispatcher(
            name,
            actions,
            weight_overrides=config.weights_for(name),
            no_repeats=no_repeats,
            max_retries=config.max_action_retries,
            forced=self.ctx.forced,
            random_source=self.ctx.rng,
            logger_name=self.ctx.logger.logger_name,
        )

    async def open(self, screen_name: str, *args: Any, **kwargs: Any) -> ActionOutcome:
        return await self.run(self.screens[screen_name](self, *args, **kwargs))

    async def run(self, screen: Screen) -> ActionOutcome:
        """Run `screen` until it returns an outcome that leaves it."""
        ctx = self.ctx
        state = ctx.state
        if state.current_screen == screen.name:
            return NO_OP
        if screen.requires_async_play and not ctx.config.play_async:
            return NO_OP
        if screen.requires_user and state.user is None:
            return NO_OP

        parent_screen = state.current_screen
        state.current_screen = screen.name
        ctx.logger.debug(lambda: f"VU {state.ordinal}: screen {screen.name}")
        try:
            return await self._loop(screen)
        finally:
            if screen.overlay:
                state.current_screen = parent_screen

    async def _loop(self, screen: Screen) -> ActionOutcome:
        ctx = self.ctx
        if screen.metric_name:
            ctx.metrics.screen_counter(screen.metric_name).add(1)
        dispatcher = self.make_dispatcher(
            screen.dispatcher_name or screen.name,
            screen.build_actions(),
            no_repeats=screen.no_repeats,
        )

        outcome = await screen.on_enter()
        if outcome is not None:
            return await screen.on_leave(outcome)

        outcome = CONTINUE
        while True:
            await ctx.delays.think(outcome.kind)
            if not ctx.lifecycle.is_active():
                await ctx.lifecycle.terminate()
                return FINISHED
            early = await screen.before_dispatch()
            if early is not None:
                return await screen.on_leave(early)

            outcome = await dispatcher.dispatch()
            if outcome.leaves_screen or screen.single_action:
                return await screen.on_leave(outcome)
            interrupt = await screen.after_dispatch(outcome)
            if interrupt is None and screen.responds_to_alerts:
                interrupt = screen.pending_alert()
            if interrupt is not None:
                return await screen.on_leave(interrupt)

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""One session of a virtual user: loading, the home screen, then tab hopping."""

from vusim.common.config import SimulationConfig
from vusim.common.enums import OutcomeKind
from vusim.dispatch import FINISHED, SUSPEND, Action, ActionOutcome
from vusim.screens.loading import run_loading
from vusim.screens.runner import ScreenRunner

SESSION_DISPATCHER = "session"
EXIT_RANGE_SEC = (60.0, 120.0)
EXIT_WEIGHT = 5.0
TAB_WEIGHT = 10.0


def session_tabs(config: SimulationConfig) -> list[str]:
    tabs = ["activity", "goals", "home"]
    if config.play_async:
        tabs += ["events", "social"]
    return tabs


def session_weights(config: SimulationConfig) -> dict[str, float]:
    """Default weights of the session dispatcher."""
    weights = {"exit": EXIT_WEIGHT}
    weights.update({f"{tab}_screen": TAB_WEIGHT for tab in session_tabs(config)})
    return weights


def session_actions(runner: ScreenRunner) -> list[Action]:
    ctx = runner.ctx

    async def exit_app() -> ActionOutcome:
        ctx.logger.info(f"VU {ctx.state.ordinal}: Exiting session...")
        await ctx.delays.delay_range(*EXIT_RANGE_SEC)
        return SUSPEND

    def tab(screen_name: str) -> Action:
        return Action(
            f"{screen_name}_screen", TAB_WEIGHT, lambda: runner.open(screen_name)
        )

    return [Action("exit", EXIT_WEIGHT, exit_app)] + [
        tab(screen_name) for screen_name in session_tabs(ctx.config)
    ]


async def run_session(runner: ScreenRunner) -> ActionOutcome:
    """Run one session until it suspends, aborts, or the VU is ramped down.

    A screen may ask for a jump to another tab (e.g. to answer a challenge), in
    which case that tab is opened next instead of drawing one at random.
    """
    ctx = runner.ctx
    outcome = await run_loading(ctx)
    if outcome.ends_iteration:
        return outcome
    outcome = await runner.open("home")
    if outcome.ends_iteration:
        return outcome

    dispatcher = runner.make_dispatcher(
        SESSION_DISPATCHER, session_actions(runner), no_repeats=True
    )
    while ctx.lifecycle.is_active():
        if outcome.kind == OutcomeKind.JUMP_TO_SCREEN and ctx.config.play_async:
            outcome = await dispatcher.dispatch_named(f"{outcome.screen}_screen")
        else:
            outcome = await dispatcher.dispatch()
        if outcome.ends_iteration:
            return outcome
    return FINISHED

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.common.config import SimulationConfig
from vusim.common.exceptions import ConfigurationError
from vusim.screens.activity import ActivityScreen, FeedScreen
from vusim.screens.events import EventDetailsScreen, EventsScreen
from vusim.screens.game_over import (
    ARCADE_GAME_OVER,
    GAME_OVER_WEIGHTS,
    HOME_GAME_OVER,
)
from vusim.screens.goals import GoalsScreen
from vusim.screens.home import HomeScreen, PowerPlaySettingsScreen
from vusim.screens.menus import SettingsScreen, WalletScreen
from vusim.screens.runner import MENU_BAR, Screen
from vusim.screens.session import SESSION_DISPATCHER, session_weights
from vusim.screens.social import PvPScreen, SocialScreen

SCREEN_TABLE: dict[str, type[Screen]] = {
    screen.name: screen
    for screen in (
        HomeScreen,
        PowerPlaySettingsScreen,
        SettingsScreen,
        WalletScreen,
        ActivityScreen,
        FeedScreen,
        GoalsScreen,
        EventsScreen,
        EventDetailsScreen,
        SocialScreen,
        PvPScreen,
    )
}
"""Screen classes by screen name."""


def default_weights(config: SimulationConfig) -> dict[str, dict[str, float | None]]:
    """Default action weights by dispatcher name.

    None marks a weight computed from the screen's state when it opens.
    """
    weights: dict[str, dict[str, float | None]] = {
        SESSION_DISPATCHER: dict(session_weights(config))
    }
    for screen in SCREEN_TABLE.values():
        table = weights.setdefault(screen.dispatcher_name or screen.name, {})
        if screen.menu_bar_weight is not None:
            for spec in MENU_BAR:
                table[spec.name] = (
                    screen.menu_bar_weight * config.menu_bar_split[spec.name]
                )
        for spec in screen.actions:
            table[spec.name] = None if callable(spec.weight) else spec.weight
    for dispatcher_name in (HOME_GAME_OVER, ARCADE_GAME_OVER):
        weights[dispatcher_name] = dict(GAME_OVER_WEIGHTS)
    return weights


def check_effective_weights(config: SimulationConfig) -> None:
    """Reject overrides that leave a dispatcher with no selectable action.

    Overrides only replace the actions they name, so the check runs on the
    defaults with the overrides merged in.

    Raises:
        ConfigurationError: If a dispatcher ends up with every weight at zero.
    """
    for dispatcher_name, defaults in default_weights(config).items():
        effective = dict(defaults)
        effective.update(
            (name, weight)
            for name, weight in config.weights_for(dispatcher_name).items()
            if name in defaults
        )
        if effective and not any(w is None or w > 0 for w in effective.values()):
            raise ConfigurationError(
                f"action_weights.{dispatcher_name} leaves no action with a positive "
                f"weight: {effective}"
            )

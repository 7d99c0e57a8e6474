# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.screens.game_over import game_over, play_arcade, play_random_live
from vusim.screens.loading import run_loading
from vusim.screens.runner import ActionSpec, Screen, ScreenRunner
from vusim.screens.session import run_session, session_actions
from vusim.screens.table import SCREEN_TABLE

__all__ = [
    "SCREEN_TABLE",
    "ActionSpec",
    "Screen",
    "ScreenRunner",
    "game_over",
    "play_arcade",
    "play_random_live",
    "run_loading",
    "run_session",
    "session_actions",
]

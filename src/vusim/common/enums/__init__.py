# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.common.enums.base_enums import CaseInsensitiveStrEnum
from vusim.common.enums.error_enums import ErrCode, ErrorKind
from vusim.common.enums.game_enums import (
    ClientEventType,
    ConfigType,
    CurrencyType,
    FeedType,
    GameStatus,
    GameType,
    ItemType,
    LeaderboardType,
    ProgressTrackerState,
    SpecialEventType,
    UserPlaySessionStatus,
    UserPlaySessionType,
    UserQueueStatus,
    UserSpecialEventStatus,
)
from vusim.common.enums.outcome_enums import OutcomeKind

__all__ = [
    "CaseInsensitiveStrEnum",
    "ClientEventType",
    "ConfigType",
    "CurrencyType",
    "ErrCode",
    "ErrorKind",
    "FeedType",
    "GameStatus",
    "GameType",
    "ItemType",
    "LeaderboardType",
    "OutcomeKind",
    "ProgressTrackerState",
    "SpecialEventType",
    "UserPlaySessionStatus",
    "UserPlaySessionType",
    "UserQueueStatus",
    "UserSpecialEventStatus",
]

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.common.enums.base_enums import CaseInsensitiveStrEnum


class UserQueueStatus(CaseInsensitiveStrEnum):
    NONE = "none"
    QUEUED = "queued"
    ADMITTED = "admitted"
    PLAYING = "playing"


class UserPlaySessionStatus(CaseInsensitiveStrEnum):
    """Status of one of a user's play sessions (live or asynchronous)."""

    CHALLENGE_ISSUED = "issued"
    CHALLENGE_RECEIVED = "received"
    CHALLENGE_ACCEPTED = "accepted"
    CHALLENGE_REJECTED = "rejected"
    WAITING_OPPONENT = "waiting_opponent"
    CONFIRMED = "confirmed"
    PLAYING = "playing"
    COMPLETED = "completed"


class UserPlaySessionType(CaseInsensitiveStrEnum):
    LIVE = "live"
    ARCADE = "arcade"
    TOWER = "tower"
    CHALLENGE = "challenge"


class UserSpecialEventStatus(CaseInsensitiveStrEnum):
    """The user's standing in a special event, as reported by the backend."""

    UNINVOLVED = "uninvolved"
    ACTIVE = "active"
    PLAYING = "playing"
    ELIMINATED = "eliminated"
    WON = "won"
    RUNNER_UP = "runnerUp"


class GameType(CaseInsensitiveStrEnum):
    """Mini-game types. Each one takes a differently shaped move."""

    MONKEY_BUSINESS = "ShootingGalleryGame"
    """Move is an amount of water between zero and the water the player holds."""

    CRYSTAL_CAVERNS = "CrystalCaveGame"
    """Move is one of the buttons 1, 2 or 3."""

    MAGNET_MADNESS = "MagnetGame"
    """Move is the value of one of the active buttons."""

    BLASTEROIDS = "AsteroidGame"
    """Move is the value of one of the active buttons."""


class GameStatus(CaseInsensitiveStrEnum):
    GAME_COMPLETE = "gameComplete"


class ClientEventType(CaseInsensitiveStrEnum):
    FINISHED_LOADING = "finishedLoading"
    BEGIN_ROUND_TIMER = "beginRoundTimer"
    ACK_RESULT = "ackResult"


class LeaderboardType(CaseInsensitiveStrEnum):
    WINNINGS_TODAY = "winningsToday"
    WINNINGS_YESTERDAY = "winningsYesterday"
    WINNINGS_THIS_WEEK = "winningsThisWeek"
    WINNINGS_LAST_WEEK = "winningsLastWeek"
    HIGHEST_BALANCE = "highestBalance"
    CURRENT_BALANCE = "currentBalance"
    MOST_DONATED = "mostDonated"
    SURGE_SCORE = "surgeScore"
    AD_HOC_SCORE = "adHocScore"


class FeedType(CaseInsensitiveStrEnum):
    WINNINGS = "winnings"
    AD_HOC = "adhoc"


class SpecialEventType(CaseInsensitiveStrEnum):
    SURGE = "surge"
    ADHOC_SEASON = "adhocSeason"
    ADHOC_QF = "adhocQF"
    ADHOC_MINI = "adhocMini"


class CurrencyType(CaseInsensitiveStrEnum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class ItemType(CaseInsensitiveStrEnum):
    MEGA_SPIN = "megaSpin"
    BASIC_SPIN = "basicSpin"


class ProgressTrackerState(CaseInsensitiveStrEnum):
    COMPLETE = "complete"


class ConfigType(CaseInsensitiveStrEnum):
    """Backend configuration documents fetched with `config/<type>`."""

    TOWER_DATA = "towerdata"
    APP_DATA = "appData"
    CHARITY_DATA = "charitydata"

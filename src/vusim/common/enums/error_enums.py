# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import IntEnum

from vusim.common.enums.base_enums import CaseInsensitiveStrEnum


class ErrorKind(CaseInsensitiveStrEnum):
    """Classification of a failed request, used to decide how a screen reacts."""

    TRANSIENT = "transient"
    """Server side failure (HTTP >= 500). Already retried by the request client."""

    APPLICATION = "application"
    """A definitive rejection with an application error code. Never retried."""

    FATAL = "fatal"
    """Client side or unattributable failure (no HTTP status or no error code)."""


class ErrCode(IntEnum):
    """Application error codes returned by the game backend in `error.code`."""

    NONE = 0
    PHONE_NUMBER_INVALID = 1
    USERNAME_INVALID = 2
    USERNAME_IN_USE = 3
    UPDATE_FAILURE = 4
    USER_NOT_FOUND = 5  # authenticated account is not registered yet
    PERCENTAGE_INVALID = 6
    ACCOUNT_INSUFFICIENT = 7
    COGNITO_ERROR = 8
    PHONE_NUMBER_UNCONFIRMED = 9
    ALREADY_REGISTERED = 10
    INVITE_CODE_INVALID = 11
    ALREADY_PLAYING = 12
    NOT_ADMITTED = 13
    NOT_PLAYING = 14
    ADMISSION_EXPIRED = 15
    NOT_QUEUED = 16
    AUTH_ERROR = 17
    CASH_OUT_INVALID_STATE = 18
    INCOMPATIBLE_CLIENT_VERSION = 19
    INCOMPATIBLE_SERVER_VERSION = 20
    PAYEE_INVALID = 21
    INTERNAL_ERROR = 22
    INVALID_QUERY_PARAMS = 23
    AMOUNT_INVALID = 24
    GAME_NOT_PLAYABLE = 25
    AD_ERROR = 26
    USER_INELIGIBLE = 27
    TRANSACTION_TIMEOUT = 28
    DOCUMENT_TIMEOUT = 29
    COMMIT_TRANSACTION_RETRIES_EXCEEDED = 30
    TRANSACTION_RETRIES_EXCEEDED = 31
    DOCUMENT_RETRIES_EXCEEDED = 32
    OCC_VERSION_MISMATCH = 33
    NO_DEVICE_ID = 34
    MULTI_DEVICE_PLAY = 35
    INVALID_LEADERBOARD_TYPE = 36
    INVALID_LEVEL_REQUEST = 37
    INVALID_POWER_UP = 38
    NO_POWER_UP_AVAILABLE = 39
    NO_PENNIES_AVAILABLE = 40
    INVALID_INVITER = 41
    INVALID_QUANTITY = 42
    LEVEL_TOO_HIGH = 43
    ALREADY_INVITED = 44
    GLOBAL_PENNY_CAP_EXCEEDED = 45
    SESSION_NOT_FOUND = 46
    OPPONENT_INELIGIBLE = 47
    OPPONENT_NOT_PLAYING = 48
    DUPLICATE_CHALLENGE = 49
    INVALID_SESSION = 50
    OPPONENT_NOT_FOUND = 51
    NO_SESSION_ID = 52
    NO_GAME_FOR_SESSION = 53
    OPPONENT_USERNAME_INVALID = 54
    NOT_AT_LEVEL = 55
    AMOUNT_MISMATCH = 56
    GAME_UNAVAILABLE = 57
    OPPONENT_GAME_UNAVAILABLE = 58
    SERVER_MAINTENANCE_DOWNTIME = 59
    GAME_NOT_FOUND = 60
    SESSIONS_EXCEEDED = 61

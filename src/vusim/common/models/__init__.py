# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.common.models.auth_models import AuthToken, IdentityTokens
from vusim.common.models.backend_models import (
    Consumable,
    GameAvailability,
    GameSnapshot,
    InventoryItem,
    InviteData,
    LevelDescriptor,
    PlaySession,
    ProgressTracker,
    ProgressTrackers,
    SpecialEvent,
    SpecialEventSequence,
    UserProfile,
    UserSnapshot,
)
from vusim.common.models.base_models import BackendModel, VUSimBaseModel
from vusim.common.models.request_models import ErrorDetails, HttpResponse, RequestResult
from vusim.common.models.user_models import VirtualUserSchedule, VirtualUserState

__all__ = [
    "AuthToken",
    "BackendModel",
    "Consumable",
    "ErrorDetails",
    "GameAvailability",
    "GameSnapshot",
    "HttpResponse",
    "IdentityTokens",
    "InventoryItem",
    "InviteData",
    "LevelDescriptor",
    "PlaySession",
    "ProgressTracker",
    "ProgressTrackers",
    "RequestResult",
    "SpecialEvent",
    "SpecialEventSequence",
    "UserProfile",
    "UserSnapshot",
    "VUSimBaseModel",
    "VirtualUserSchedule",
    "VirtualUserState",
]

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.dispatch.action import (
    CONTINUE,
    FATAL_ABORT,
    FINISHED,
    HANDLED_ERROR,
    LEAVE_SCREEN,
    NO_OP,
    SUSPEND,
    Action,
    ActionBody,
    ActionOutcome,
    Condition,
    jump_to,
)
from vusim.dispatch.dispatcher import DEFAULT_MAX_RETRIES, Dispatcher
from vusim.dispatch.forced_sequence import ForcedEntry, ForcedSequence

__all__ = [
    "CONTINUE",
    "DEFAULT_MAX_RETRIES",
    "FATAL_ABORT",
    "FINISHED",
    "HANDLED_ERROR",
    "LEAVE_SCREEN",
    "NO_OP",
    "SUSPEND",
    "Action",
    "ActionBody",
    "ActionOutcome",
    "Condition",
    "Dispatcher",
    "ForcedEntry",
    "ForcedSequence",
    "jump_to",
]

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.timing.delays import DelayPolicy
from vusim.timing.durations import parse_duration
from vusim.timing.ramping import RampSchedule, RampStage, SessionLifecycle

__all__ = [
    "DelayPolicy",
    "RampSchedule",
    "RampStage",
    "SessionLifecycle",
    "parse_duration",
]

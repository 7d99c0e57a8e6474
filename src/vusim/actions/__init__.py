# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.actions.backend_api import GameBackend
from vusim.actions.context import ActionContext
from vusim.actions.outcomes import (
    check_response,
    is_fatal,
    ok_or_back_or_error,
    ok_or_error,
    to_outcome,
)

__all__ = [
    "ActionContext",
    "GameBackend",
    "check_response",
    "is_fatal",
    "ok_or_back_or_error",
    "ok_or_error",
    "to_outcome",
]

# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.common.config.loader import (
    load_config,
    read_json_with_comments,
    strip_json_comments,
)
from vusim.common.config.simulation_config import (
    DEFAULT_MENU_BAR_SPLIT,
    ErrorSuppression,
    RetryConfig,
    SimulationConfig,
    StackEndpoints,
    StageConfig,
)

__all__ = [
    "DEFAULT_MENU_BAR_SPLIT",
    "ErrorSuppression",
    "RetryConfig",
    "SimulationConfig",
    "StackEndpoints",
    "StageConfig",
    "load_config",
    "read_json_with_comments",
    "strip_json_comments",
]

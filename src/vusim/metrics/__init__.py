# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from vusim.metrics.sink import (
    Counter,
    MetricKind,
    MetricsSink,
    Rate,
    SimulationMetrics,
    Trend,
)
from vusim.metrics.summary import (
    MetricSummary,
    build_summary_table,
    export_summary_json,
    summarize,
)

__all__ = [
    "Counter",
    "MetricKind",
    "MetricSummary",
    "MetricsSink",
    "Rate",
    "SimulationMetrics",
    "Trend",
    "build_summary_table",
    "export_summary_json",
    "summarize",
]

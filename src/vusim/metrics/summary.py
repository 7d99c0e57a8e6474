# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""End of run summary of the metrics sink."""

from pathlib import Path

import numpy as np
import orjson
from pydantic import Field
from rich.table import Table

from vusim.common.models import VUSimBaseModel
from vusim.metrics.sink import Counter, MetricKind, MetricsSink, Rate, Trend


class MetricSummary(VUSimBaseModel):
    name: str = Field(..., description="Metric name.")
    kind: MetricKind = Field(..., description="Counter, trend or rate.")
    count: float = Field(default=0, description="Counter total or number of samples.")
    mean: float | None = None
    p50: float | None = None
    p95: float | None = None
    max: float | None = None
    ratio: float | None = Field(default=None, description="Rate pass ratio.")


def summarize(sink: MetricsSink) -> list[MetricSummary]:
    """Compute the summary of every metric in the sink."""
    summaries: list[MetricSummary] = []
    for metric in sink.snapshot():
        if isinstance(metric, Counter):
            summaries.append(
                MetricSummary(name=metric.name, kind=metric.kind, count=metric.total)
            )
        elif isinstance(metric, Trend):
            values = np.asarray(metric.values, dtype=np.float64)
            if values.size == 0:
                summaries.append(MetricSummary(name=metric.name, kind=metric.kind))
                continue
            p50, p95 = np.percentile(values, [50, 95])
            summaries.append(
                MetricSummary(
                    name=metric.name,
                    kind=metric.kind,
                    count=int(values.size),
                    mean=float(values.mean()),
                    p50=float(p50),
                    p95=float(p95),
                    max=float(values.max()),
                )
            )
        elif isinstance(metric, Rate):
            summaries.append(
                MetricSummary(
                    name=metric.name,
                    kind=metric.kind,
                    count=metric.total,
                    ratio=metric.ratio,
                )
            )
    return summaries


def _fmt(value: float | None) -> str:
    return "[dim]N/A[/dim]" if value is None else f"{value:,.2f}"


def build_summary_table(summaries: list[MetricSummary]) -> Table:
    table = Table(title="Load Test Metrics")
    table.add_column("Metric", justify="right", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    for col in ("Count", "Mean", "P50", "P95", "Max", "Rate"):
        table.add_column(col, justify="right", style="green", no_wrap=True)
    for s in summaries:
        table.add_row(
            s.name,
            str(s.kind),
            f"{s.count:,.0f}",
            _fmt(s.mean),
            _fmt(s.p50),
            _fmt(s.p95),
            _fmt(s.max),
            "[dim]N/A[/dim]" if s.ratio is None else f"{s.ratio:.2%}",
        )
    return table


def export_summary_json(summaries: list[MetricSummary], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(
        orjson.dumps(
            [s.model_dump(mode="json") for s in summaries],
            option=orjson.OPT_INDENT_2,
        )
    )

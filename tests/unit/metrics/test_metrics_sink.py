# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the metrics sink and the end of run summary.

Tests:
- Counter, Trend and Rate accumulation, with tag breakdowns
- Metric registry: creation on first use, kind conflicts
- Thread safety of concurrent adds
- Summary statistics, table rendering and JSON export
"""

import threading

import orjson
import pytest
from rich.console import Console

from vusim.common.exceptions import InvalidStateError
from vusim.metrics import (
    MetricKind,
    MetricsSink,
    SimulationMetrics,
    build_summary_table,
    export_summary_json,
    summarize,
)


class TestMetrics:
    def test_counter_with_tags(self):
        counter = MetricsSink().counter("screens")
        counter.add(1, tags={"screen": "home"})
        counter.add(2, tags={"screen": "home"})
        counter.add()

        assert counter.total == 4
        assert counter.by_tags() == {(("screen", "home"),): 3, (): 1}

    def test_trend_values(self):
        trend = MetricsSink().trend("round_delay", is_time=True)
        for value in (3.0, 1.0, 2.0):
            trend.add(value)

        assert trend.values == [3.0, 1.0, 2.0]
        assert trend.count == 3
        assert trend.is_time

    @pytest.mark.parametrize(
        "observations,expected",
        [([], 0.0), ([1, 0, 0, 1], 0.5), ([True, True], 1.0), ([0], 0.0)],
    )
    def test_rate_ratio(self, observations, expected):
        rate = MetricsSink().rate("bots_percent")
        for value in observations:
            rate.add(value)
        assert rate.ratio == expected
        assert rate.total == len(observations)


class TestMetricsSink:
    def test_same_name_returns_same_metric(self):
        sink = MetricsSink()
        assert sink.counter("a") is sink.counter("a")

    def test_kind_conflict(self):
        sink = MetricsSink()
        sink.counter("latency")
        with pytest.raises(InvalidStateError, match="is a counter, not a trend"):
            sink.trend("latency")

    def test_count_of_unknown_or_non_counter(self):
        sink = MetricsSink()
        sink.trend("t").add(5)
        assert sink.count("missing") == 0
        assert sink.count("t") == 0

    def test_concurrent_adds(self):
        counter = MetricsSink().counter("hits")

        def work():
            for _ in range(1000):
                counter.add(1)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter.total == 8000

    def test_simulation_metrics_share_the_sink(self):
        metrics = SimulationMetrics()
        metrics.fatal_aborts.add(1)
        metrics.screen_counter("home_screen").add(1)

        assert metrics.sink.count("fatal_aborts") == 1
        assert metrics.sink.count("home_screen") == 1


class TestSummary:
    def test_summarize_each_kind(self):
        sink = MetricsSink()
        sink.counter("sessions").add(3)
        trend = sink.trend("session_duration", is_time=True)
        for value in range(1, 101):
            trend.add(float(value))
        sink.trend("empty")
        rate = sink.rate("bots_percent")
        rate.add(1)
        rate.add(0)

        summaries = {s.name: s for s in summarize(sink)}

        assert list(summaries) == ["bots_percent", "empty", "session_duration", "sessions"]
        assert summaries["sessions"].kind == MetricKind.COUNTER
        assert summaries["sessions"].count == 3
        duration = summaries["session_duration"]
        assert duration.count == 100
        assert duration.mean == pytest.approx(50.5)
        assert duration.p50 == pytest.approx(50.5)
        assert duration.p95 == pytest.approx(95.05)
        assert duration.max == 100.0
        assert summaries["empty"].count == 0
        assert summaries["empty"].mean is None
        assert summaries["bots_percent"].ratio == 0.5

    def test_table_and_export(self, tmp_path):
        sink = MetricsSink()
        sink.counter("api_errors").add(2)
        sink.rate("bots_percent").add(1)
        summaries = summarize(sink)

        console = Console(record=True, width=160, color_system=None)
        console.print(build_summary_table(summaries))
        text = console.export_text()
        assert "api_errors" in text
        assert "100.00%" in text
        assert "N/A" in text

        path = tmp_path / "nested" / "summary.json"
        export_summary_json(summaries, path)
        exported = orjson.loads(path.read_bytes())
        assert exported[0] == {
            "name": "api_errors",
            "kind": "counter",
            "count": 2.0,
            "mean": None,
            "p50": None,
            "p95": None,
            "max": None,
            "ratio": None,
        }

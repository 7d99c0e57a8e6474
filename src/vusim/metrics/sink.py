# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Write-only metrics shared by every virtual user.

Three metric kinds mirror a load testing tool's vocabulary:

- :class:`Counter`: a running sum.
- :class:`Trend`: a distribution of observed values (e.g. durations in ms).
- :class:`Rate`: the fraction of non-zero observations.

Every `add` is guarded by a lock so metrics can be shared by any number of
concurrent virtual users. Values are broken down by their tag set.
"""

import threading
from abc import ABC, abstractmethod
from collections import defaultdict

from vusim.common.enums import CaseInsensitiveStrEnum
from vusim.common.exceptions import InvalidStateError

TagKey = tuple[tuple[str, str], ...]


def _tag_key(tags: dict[str, str] | None) -> TagKey:
    if not tags:
        return ()
    return tuple(sorted((k, str(v)) for k, v in tags.items()))


class MetricKind(CaseInsensitiveStrEnum):
    COUNTER = "counter"
    TREND = "trend"
    RATE = "rate"


class BaseMetric(ABC):
    kind: MetricKind

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()

    @abstractmethod
    def add(self, value: float, tags: dict[str, str] | None = None) -> None: ...


class Counter(BaseMetric):
    kind = MetricKind.COUNTER

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._total = 0.0
        self._by_tags: dict[TagKey, float] = defaultdict(float)

    def add(self, value: float = 1, tags: dict[str, str] | None = None) -> None:
        key = _tag_key(tags)
        with self._lock:
            self._total += value
            self._by_tags[key] += value

    @property
    def total(self) -> float:
        with self._lock:
            return self._total

    def by_tags(self) -> dict[TagKey, float]:
        with self._lock:
            return dict(self._by_tags)


class Trend(BaseMetric):
    kind = MetricKind.TREND

    def __init__(self, name: str, is_time: bool = False) -> None:
        super().__init__(name)
        self.is_time = is_time
        self._values: list[float] = []
        self._by_tags: dict[TagKey, list[float]] = defaultdict(list)

    def add(self, value: float, tags: dict[str, str] | None = None) -> None:
        key = _tag_key(tags)
        with self._lock:
            self._values.append(value)
            self._by_tags[key].append(value)

    @property
    def values(self) -> list[float]:
        with self._lock:
            return list(self._values)

    @property
    def count(self) -> int:
        with self._lock:
            return len(self._values)


class Rate(BaseMetric):
    kind = MetricKind.RATE

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self._passes = 0
        self._total = 0

    def add(self, value: float, tags: dict[str, str] | None = None) -> None:
        with self._lock:
            self._total += 1
            if value:
                self._passes += 1

    @property
    def total(self) -> int:
        with self._lock:
            return self._total

    @property
    def ratio(self) -> float:
        with self._lock:
            return self._passes / self._total if self._total else 0.0


class MetricsSink:
    """Registry of named metrics. Metrics are created on first use and never removed."""

    def __init__(self) -> None:
        self._metrics: dict[str, BaseMetric] = {}
        self._lock = threading.Lock()

    def _get_or_create(self, name: str, kind: MetricKind, **kwargs) -> BaseMetric:
        with self._lock:
            metric = self._metrics.get(name)
            if metric is None:
                metric_cls = {
                    MetricKind.COUNTER: Counter,
                    MetricKind.TREND: Trend,
                    MetricKind.RATE: Rate,
                }[kind]
                metric = metric_cls(name, **kwargs)
                self._metrics[name] = metric
            elif metric.kind != kind:
                raise InvalidStateError(
                    f"Metric '{name}' is a {metric.kind}, not a {kind}"
                )
            return metric

    def counter(self, name: str) -> Counter:
        return self._get_or_create(name, MetricKind.COUNTER)  # type: ignore[return-value]

    def trend(self, name: str, is_time: bool = False) -> Trend:
        return self._get_or_create(name, MetricKind.TREND, is_time=is_time)  # type: ignore[return-value]

    def rate(self, name: str) -> Rate:
        return self._get_or_create(name, MetricKind.RATE)  # type: ignore[return-value]

    def get(self, name: str) -> BaseMetric | None:
        with self._lock:
            return self._metrics.get(name)

    def count(self, name: str) -> float:
        """Total of a counter, 0 if it was never incremented."""
        metric = self.get(name)
        return metric.total if isinstance(metric, Counter) else 0.0

    def snapshot(self) -> list[BaseMetric]:
        with self._lock:
            return sorted(self._metrics.values(), key=lambda m: m.name)


class SimulationMetrics:
    """The named metrics recorded by the simulation, bound to one sink."""

    def __init__(self, sink: MetricsSink | None = None) -> None:
        self.sink = sink or MetricsSink()
        s = self.sink
        self.sessions = s.counter("sessions")
        self.session_duration = s.trend("session_duration", is_time=True)
        self.matching_delay = s.trend("matching_delay", is_time=True)
        self.async_game_starts = s.counter("async_game_starts")
        self.async_game_accepts = s.counter("async_game_accepts")
        self.async_game_declines = s.counter("async_game_declines")
        self.async_game_moves = s.counter("async_game_moves")
        self.async_game_completes = s.counter("async_game_completes")
        self.live_games = s.counter("live_games")
        self.live_game_duration = s.trend("live_game_duration", is_time=True)
        self.round_delay = s.trend("round_delay", is_time=True)
        self.bots_percent = s.rate("bots_percent")
        self.basic_spins = s.counter("basic_spins")
        self.mega_spins = s.counter("mega_spins")
        self.network_errors = s.counter("network_errors")
        self.api_errors = s.counter("api_errors")
        self.timeouts = s.counter("timeouts")
        self.cognito_throttles = s.counter("cognito_throttles")
        self.goal_awards_claimed = s.counter("goal_awards_claimed")
        self.event_prizes_claimed = s.counter("event_prizes_claimed")
        self.replays_watched = s.counter("replays_watched")
        self.live_game_cancel_requests = s.counter("live_game_cancel_requests")
        self.fatal_aborts = s.counter("fatal_aborts")

    def screen_counter(self, metric_name: str) -> Counter:
        return self.sink.counter(metric_name)

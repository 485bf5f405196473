"""Aggregated timing of named code sections."""

from __future__ import annotations

import time
from typing import Callable, ClassVar, Optional


def _microseconds() -> int:
    return time.perf_counter_ns() // 1000


class PerfAggregator:
    """Counts calls of a named section and sums their durations in microseconds."""

    _instances: ClassVar[list[PerfAggregator]] = []

    def __init__(self, name: str) -> None:
        self.name = name
        self.calls = 0
        self.total_duration_us = 0

    @classmethod
    def create(cls, name: str) -> PerfAggregator:
        """Create an aggregator and register it among all instances."""
        aggregator = cls(name)
        PerfAggregator._instances.append(aggregator)
        return aggregator

    @classmethod
    def instances(cls) -> tuple[PerfAggregator, ...]:
        """Return every aggregator made by create(), in creation order."""
        return tuple(PerfAggregator._instances)

    def add_call(self, duration: int) -> None:
        self.calls += 1
        self.total_duration_us += duration

    @property
    def avg_duration_us(self) -> int:
        if self.calls == 0:
            raise ValueError(f"no calls recorded for {self.name!r}")
        return self.total_duration_us // self.calls

    def __repr__(self) -> str:
        return f"PerfAggregator({self.name!r}, calls={self.calls}, total_duration_us={self.total_duration_us})"


class ScopedPerfMonitor:
    """Context manager that records the time spent inside it as one call."""

    def __init__(self, aggregator: PerfAggregator, clock: Optional[Callable[[], int]] = None) -> None:
        self._aggregator = aggregator
        self._clock = clock or _microseconds
        self._start = 0

    def __enter__(self) -> ScopedPerfMonitor:
        self._start = self._clock()
        return self

    def __exit__(self, *args: object) -> None:
        self._aggregator.add_call(self._clock() - self._start)
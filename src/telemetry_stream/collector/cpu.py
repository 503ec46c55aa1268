"""CPU utilization collector."""

from __future__ import annotations

from .base import BaseCollector, MetricKind


class CpuCollector(BaseCollector):
    """Mean utilization across all cores.

    A host that reports no cores yields 0.0 rather than an error.
    """

    @property
    def kind(self) -> MetricKind:
        return MetricKind.CPU

    def collect(self) -> float:
        per_cpu = self._provider.per_cpu_percent()
        if not per_cpu:
            return 0.0
        return sum(per_cpu) / len(per_cpu)

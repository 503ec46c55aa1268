"""Memory usage collector."""

from __future__ import annotations

from .base import BaseCollector, MetricKind


class MemoryCollector(BaseCollector):
    """Used memory in kilobytes, exactly as the provider reports it."""

    @property
    def kind(self) -> MetricKind:
        return MetricKind.MEMORY

    def collect(self) -> float:
        return float(self._provider.used_memory_kb())

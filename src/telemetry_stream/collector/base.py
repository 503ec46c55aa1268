"""Base interfaces for host metric collectors."""

from __future__ import annotations

import abc
import enum


class MetricKind(enum.Enum):
    """Metric kinds the agent can emit, valued by their wire token."""

    CPU = "CPU"
    MEMORY = "MEM"

    @property
    def token(self) -> str:
        return self.value


class HostMetricsProvider(abc.ABC):
    """Access to the host's raw utilization readings."""

    @abc.abstractmethod
    def per_cpu_percent(self) -> list[float]:
        """Refresh and return the current utilization of each core, in percent."""

    @abc.abstractmethod
    def used_memory_kb(self) -> float:
        """Refresh and return the currently used memory, in kilobytes."""


class BaseCollector(abc.ABC):
    """Abstract base class for single-metric collectors."""

    def __init__(self, provider: HostMetricsProvider) -> None:
        self._provider = provider

    @property
    @abc.abstractmethod
    def kind(self) -> MetricKind:
        """Metric kind produced by this collector."""

    @property
    def name(self) -> str:
        return self.kind.token

    @abc.abstractmethod
    def collect(self) -> float:
        """Return the current value of this collector's metric."""

"""Sampler that runs every registered collector once per tick."""

from __future__ import annotations

import logging

from ..config import AgentConfig
from ..sample import Sample
from .base import BaseCollector, HostMetricsProvider, MetricKind
from .cpu import CpuCollector
from .memory import MemoryCollector

logger = logging.getLogger(__name__)


class MetricSampler:
    """Produces one :data:`Sample` per call from a fixed set of collectors.

    Collectors always run in :class:`MetricKind` declaration order, so the
    keys of every sample appear in the same order no matter how the
    configuration lists them.
    """

    def __init__(
        self,
        provider: HostMetricsProvider | None = None,
        config: AgentConfig | None = None,
    ) -> None:
        if provider is None:
            from .host import PsutilHostProvider
            provider = PsutilHostProvider()
        config = config or AgentConfig()

        enabled = {MetricKind.CPU: config.cpu, MetricKind.MEMORY: config.memory}
        factories = {MetricKind.CPU: CpuCollector, MetricKind.MEMORY: MemoryCollector}
        self._collectors: list[BaseCollector] = [
            factories[kind](provider) for kind in MetricKind if enabled[kind]
        ]
        logger.debug("MetricSampler collectors: %s", [c.name for c in self._collectors])

    @property
    def kinds(self) -> list[MetricKind]:
        return [c.kind for c in self._collectors]

    def sample(self) -> Sample:
        """Query the host for every registered metric and return a snapshot."""
        return {c.kind.token: c.collect() for c in self._collectors}

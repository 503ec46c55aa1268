"""psutil-backed access to host utilization readings."""

from __future__ import annotations

import psutil

from .base import HostMetricsProvider


class PsutilHostProvider(HostMetricsProvider):
    """Reads per-core CPU and used memory through psutil."""

    def __init__(self) -> None:
        # prime cpu_percent so the first real call compares against now
        psutil.cpu_percent(interval=0, percpu=True)

    def per_cpu_percent(self) -> list[float]:
        return [float(pct) for pct in psutil.cpu_percent(interval=0, percpu=True)]

    def used_memory_kb(self) -> float:
        return psutil.virtual_memory().used / 1024

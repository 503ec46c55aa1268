"""Terminal presentation of decoded samples using Rich."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..sample import Sample

KB_PER_MB = 1024
KB_PER_GB = 1024 * 1024


def format_memory(kb: float) -> str:
    """Scale a kilobyte count to KB, MB or GB with two decimals."""
    if kb >= KB_PER_GB:
        return f"{kb / KB_PER_GB:.2f} GB"
    if kb >= KB_PER_MB:
        return f"{kb / KB_PER_MB:.2f} MB"
    return f"{kb:.2f} KB"


def format_metric(name: str, value: float) -> tuple[str, str]:
    """Return a display label and formatted value for one metric.

    Names are matched case-insensitively; unknown metrics keep their own
    name and get two decimals.
    """
    key = name.upper()
    if key == "CPU":
        return "CPU", f"{value:.1f}%"
    if key in ("MEM", "MEMORY"):
        return "Memory", format_memory(value)
    if key in ("DISK", "STORAGE"):
        return "Disk", f"{value:.1f}%"
    if key in ("NETWORK", "NET"):
        return "Network", f"{value:.2f} MB/s"
    if key in ("TEMPERATURE", "TEMP"):
        return "Temperature", f"{value:.1f}°C"
    return name, f"{value:.2f}"


class Presenter:
    """Renders one table per sample for a human watching the collector."""

    def __init__(self, console: Console | None = None, *, clear_screen: bool = True) -> None:
        self._console = console or Console()
        self._clear_screen = clear_screen

    def build_table(self, sample: Sample, peer: str) -> Table:
        table = Table(title=Text(f"Live telemetry from {peer}"))
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")
        for name, value in sample.items():
            label, text = format_metric(name, value)
            table.add_row(Text(label), Text(text))
        return table

    def present(self, sample: Sample, peer: str) -> None:
        if self._clear_screen:
            self._console.clear()
        if not sample:
            self._console.print(Text(f"No metrics received from {peer}", style="yellow"))
            return
        self._console.print(self.build_table(sample, peer))

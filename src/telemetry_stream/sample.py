"""The sample type shared by the agent and the collector."""

from __future__ import annotations

# Metric token -> value, in emission order.
Sample = dict[str, float]

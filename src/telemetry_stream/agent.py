"""Agent run loop: sample, encode, send, wait."""

from __future__ import annotations

import logging
import threading

from .collector.manager import MetricSampler
from .config import AgentConfig
from .errors import TransportError
from .protocol.encoder import SampleEncoder
from .transport.connection import ConnectionManager, ConnectionState

logger = logging.getLogger(__name__)


class TelemetryAgent:
    """Streams one record per interval to the collector.

    A failed send gets exactly one reconnect attempt. If that attempt fails
    too, :meth:`run` re-raises the original send error and the agent stops;
    it never retries silently forever.
    """

    def __init__(
        self,
        config: AgentConfig,
        sampler: MetricSampler | None = None,
        connection: ConnectionManager | None = None,
    ) -> None:
        self._config = config
        self._sampler = sampler or MetricSampler(config=config)
        self._connection = connection or ConnectionManager(
            config.address,
            backoff_seconds=config.reconnect_backoff_seconds,
            timeout_seconds=config.connect_timeout_seconds,
        )
        self._encoder = SampleEncoder()
        self._stop_event = threading.Event()
        self.message_count = 0

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    def tick(self) -> None:
        """Collect one sample and send it. Raises :class:`TransportError`."""
        record = self._encoder.encode(self._sampler.sample())
        self._connection.send(record)

    def _on_sent(self) -> None:
        self.message_count += 1
        every = self._config.status_every
        if every > 0 and self.message_count % every == 0:
            logger.info("%d messages sent", self.message_count)

    def run(self, max_ticks: int | None = None) -> None:
        """Run until stopped, *max_ticks* ticks elapse, or the transport dies.

        Connects first if the connection is not open yet.
        """
        if self._connection.state is ConnectionState.DISCONNECTED:
            self._connection.connect()
        logger.info(
            "Agent streaming to %s:%d every %.1fs",
            self._config.host, self._config.port, self._config.interval_seconds,
        )
        ticks = 0
        while not self._stop_event.is_set():
            try:
                self.tick()
            except TransportError as exc:
                logger.error("Failed to send telemetry: %s", exc)
                try:
                    self._connection.reconnect()
                except TransportError:
                    logger.critical("Reconnect failed, stopping agent")
                    raise exc
                self.message_count = 0
            else:
                self._on_sent()

            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            self._stop_event.wait(self._config.interval_seconds)

    def stop(self) -> None:
        """Ask :meth:`run` to return before its next tick."""
        self._stop_event.set()

    def close(self) -> None:
        self._connection.close()

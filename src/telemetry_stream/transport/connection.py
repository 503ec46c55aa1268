"""Outbound connection to the collector with one-shot reconnect."""

from __future__ import annotations

import enum
import logging
import socket
import time
from typing import IO, Any, Callable

from ..errors import TransportError

logger = logging.getLogger(__name__)

Address = tuple[str, int]
Connector = Callable[[Address, float], Any]


class ConnectionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


def _tcp_connect(address: Address, timeout: float) -> socket.socket:
    sock = socket.create_connection(address, timeout=timeout)
    # the timeout only bounds the connect; writes block until the peer
    # accepts the data or the connection breaks
    sock.settimeout(None)
    return sock


class ConnectionManager:
    """Owns the agent's single connection to the collector.

    Only this class touches the socket. :meth:`send` pushes one record and
    flushes it immediately; a failed write or flush moves the manager to
    ``RECONNECTING`` and raises :class:`TransportError`. :meth:`reconnect`
    waits ``backoff_seconds`` and replaces the broken socket with a fresh
    one. Deciding whether to retry again is left to the caller.

    *connector* and *sleep* exist so the state machine can be driven without
    a network; by default they are a TCP connect and :func:`time.sleep`.
    """

    def __init__(
        self,
        address: Address,
        *,
        backoff_seconds: float = 2.0,
        timeout_seconds: float = 5.0,
        connector: Connector | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._address = address
        self._backoff = backoff_seconds
        self._timeout = timeout_seconds
        self._connector = connector or _tcp_connect
        self._sleep = sleep
        self._sock: Any = None
        self._writer: IO[bytes] | None = None
        self._state = ConnectionState.DISCONNECTED
        self._send_failures = 0

    @property
    def address(self) -> Address:
        return self._address

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def send_failures(self) -> int:
        """Send failures since the last successful (re)connect."""
        return self._send_failures

    def _endpoint(self) -> str:
        return f"{self._address[0]}:{self._address[1]}"

    def _open(self) -> None:
        try:
            sock = self._connector(self._address, self._timeout)
        except OSError as exc:
            raise TransportError(f"cannot connect to {self._endpoint()}: {exc}", self._address) from exc
        self._sock = sock
        self._writer = sock.makefile("wb")
        self._state = ConnectionState.CONNECTED
        self._send_failures = 0

    def _release(self) -> None:
        for handle in (self._writer, self._sock):
            if handle is None:
                continue
            try:
                handle.close()
            except OSError as exc:
                logger.debug("Ignoring error while closing connection: %s", exc)
        self._writer = None
        self._sock = None

    def connect(self) -> None:
        """Open the initial connection."""
        self._open()
        logger.info("Connected to collector at %s", self._endpoint())

    def send(self, record: bytes | bytearray) -> None:
        """Write *record* in full and flush it onto the wire."""
        if self._writer is None:
            raise TransportError(f"not connected to {self._endpoint()}", self._address)
        try:
            self._writer.write(record)
            self._writer.flush()
        except OSError as exc:
            self._send_failures += 1
            self._state = ConnectionState.RECONNECTING
            raise TransportError(f"send to {self._endpoint()} failed: {exc}", self._address) from exc

    def reconnect(self) -> None:
        """Back off, then replace the connection with a new one."""
        self._state = ConnectionState.RECONNECTING
        self._release()
        logger.info("Reconnecting to %s in %.1fs", self._endpoint(), self._backoff)
        self._sleep(self._backoff)
        try:
            self._open()
        except TransportError as exc:
            logger.error("Reconnect failed: %s", exc)
            raise
        logger.info("Reconnected to %s", self._endpoint())

    def close(self) -> None:
        self._release()
        self._state = ConnectionState.DISCONNECTED

    def __enter__(self) -> ConnectionManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

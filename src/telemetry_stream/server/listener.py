"""Accept loop serving one agent connection at a time."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable

from ..config import ServerConfig
from ..sample import Sample
from .session import Session, SessionStats

logger = logging.getLogger(__name__)

ACCEPT_POLL_SECONDS = 0.5


class TelemetryServer:
    """Listens on the configured address and serves sessions sequentially.

    A new connection is accepted only after the current session ends.
    Errors while accepting or serving are logged and never stop the loop;
    only :meth:`stop` does. Failing to bind is a startup error and
    propagates from :meth:`bind`.
    """

    def __init__(self, config: ServerConfig, present: Callable[[Sample, str], None]) -> None:
        self._config = config
        self._present = present
        self._sock: socket.socket | None = None
        self._stop_event = threading.Event()
        self.sessions_served = 0

    @property
    def address(self) -> tuple[str, int]:
        """Bound address (the real port when configured with port 0)."""
        if self._sock is None:
            return self._config.address
        host, port = self._sock.getsockname()[:2]
        return host, port

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(self._config.address)
            sock.listen(1)
        except OSError:
            sock.close()
            raise
        sock.settimeout(ACCEPT_POLL_SECONDS)
        self._sock = sock
        logger.info("Listening on %s:%d", *self.address)
        return sock

    def serve_once(self) -> SessionStats | None:
        """Accept one connection and serve it to completion.

        Returns ``None`` when no connection arrived within the poll interval.
        """
        sock = self._sock if self._sock is not None else self.bind()
        try:
            conn, addr = sock.accept()
        except socket.timeout:
            return None
        peer = f"{addr[0]}:{addr[1]}"
        logger.info("Client connected: %s", peer)
        conn.settimeout(None)
        with conn, conn.makefile("rb", buffering=self._config.read_buffer_size) as stream:
            stats = Session(stream, peer, self._present).run()
        self.sessions_served += 1
        if stats.clean:
            logger.info(
                "Session with %s finished: %d presented, %d discarded",
                peer, stats.presented, stats.discarded,
            )
        else:
            logger.warning("Session with %s ended with error: %s", peer, stats.error)
        return stats

    def serve_forever(self) -> None:
        if self._sock is None:
            self.bind()
        logger.info("Waiting for connections...")
        while not self._stop_event.is_set():
            try:
                stats = self.serve_once()
            except OSError as exc:
                if self._stop_event.is_set():
                    break
                logger.error("Error accepting connection: %s", exc)
                continue
            except Exception:
                logger.exception("Session failed, waiting for the next connection")
                continue
            if stats is not None:
                logger.info("Waiting for a new connection...")
        self.close()

    def stop(self) -> None:
        """Make :meth:`serve_forever` return after the current session."""
        self._stop_event.set()

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

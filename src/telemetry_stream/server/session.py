"""Per-connection pipeline: frame reader -> decoder -> presenter."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import IO, Callable

from ..errors import DecodeError, FatalReadError
from ..protocol.decoder import decode_sample
from ..sample import Sample
from .frame_reader import FrameReader

logger = logging.getLogger(__name__)


@dataclass
class SessionStats:
    """What happened during one session."""

    peer: str
    presented: int = 0
    discarded: int = 0
    skipped: int = 0
    error: str = ""

    @property
    def clean(self) -> bool:
        """True when the session ended because the peer closed the stream."""
        return not self.error


class Session:
    """Serves one accepted connection until the peer leaves.

    Malformed records are logged and dropped; only a fatal read error ends
    the session early, and even that is reported through
    :class:`SessionStats` rather than raised.
    """

    def __init__(
        self,
        stream: IO[bytes],
        peer: str,
        present: Callable[[Sample, str], None],
    ) -> None:
        self._reader = FrameReader(stream, peer)
        self._peer = peer
        self._present = present

    def run(self) -> SessionStats:
        stats = SessionStats(peer=self._peer)
        try:
            for line in self._reader:
                try:
                    sample = decode_sample(line)
                except DecodeError as exc:
                    stats.discarded += 1
                    logger.warning("Could not decode record from %s: %s", self._peer, exc)
                    logger.info("Received data: %s", exc.line)
                    continue
                self._present(sample, self._peer)
                stats.presented += 1
        except FatalReadError as exc:
            stats.error = str(exc)
            logger.error("Error reading from %s: %s", self._peer, exc)
        else:
            logger.info("Client %s disconnected", self._peer)
        stats.skipped = self._reader.skipped_lines
        return stats

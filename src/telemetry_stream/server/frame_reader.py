"""Frame reader – pulls newline-terminated records off a byte stream."""

from __future__ import annotations

import logging
from typing import IO, Iterator

from ..errors import EncodingError, FatalReadError

logger = logging.getLogger(__name__)


class FrameReader:
    """Extracts candidate records from a buffered binary stream.

    :meth:`next_record` blocks until a full line arrives and returns it with
    surrounding whitespace removed. It never returns a blank line: blank
    lines and lines that are not valid UTF-8 are skipped (the latter with a
    warning) and reading simply continues. End of stream yields ``None``;
    any other read failure becomes :class:`FatalReadError`.
    """

    def __init__(self, stream: IO[bytes], peer: str = "") -> None:
        self._stream = stream
        self._peer = peer
        self.skipped_lines = 0

    def _read_line(self) -> str | None:
        try:
            raw = self._stream.readline()
        except OSError as exc:
            raise FatalReadError(f"read from {self._peer or 'peer'} failed: {exc}") from exc
        if not raw:
            return None
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(f"invalid UTF-8 data: {exc}", raw) from exc

    def next_record(self) -> str | None:
        """Return the next non-empty line, or ``None`` once the peer closes."""
        while True:
            try:
                line = self._read_line()
            except EncodingError as exc:
                self.skipped_lines += 1
                logger.warning("%s from %s, skipping line: %r", exc, self._peer, exc.raw)
                continue
            if line is None:
                return None
            line = line.strip()
            if line:
                return line

    def __iter__(self) -> Iterator[str]:
        while True:
            record = self.next_record()
            if record is None:
                return
            yield record

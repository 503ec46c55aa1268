"""Exception hierarchy for telemetry_stream."""

from __future__ import annotations


class TelemetryStreamError(Exception):
    """Base class for all telemetry_stream errors."""


class TransportError(TelemetryStreamError):
    """Connecting to the collector, or writing/flushing a record, failed."""

    def __init__(self, message: str, address: tuple[str, int] | None = None) -> None:
        super().__init__(message)
        self.address = address


class DecodeError(TelemetryStreamError):
    """A record could not be parsed into a sample."""

    def __init__(self, message: str, line: str) -> None:
        super().__init__(message)
        self.line = line


class EncodingError(TelemetryStreamError):
    """A line on the wire is not valid UTF-8."""

    def __init__(self, message: str, raw: bytes) -> None:
        super().__init__(message)
        self.raw = raw


class FatalReadError(TelemetryStreamError):
    """Reading from the peer failed for a reason other than bad encoding."""

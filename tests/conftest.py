"""Shared fakes for telemetry_stream tests."""

from __future__ import annotations

import itertools

import pytest

from telemetry_stream.collector.base import HostMetricsProvider


class FakeProvider(HostMetricsProvider):
    """Returns fixed sequences of readings; the last one repeats."""

    def __init__(self, cpus=([10.0, 20.0],), memory=(2048.0,)):
        self._cpus = itertools.chain(cpus, itertools.repeat(cpus[-1]))
        self._memory = itertools.chain(memory, itertools.repeat(memory[-1]))
        self.calls = 0

    def per_cpu_percent(self):
        self.calls += 1
        return list(next(self._cpus))

    def used_memory_kb(self):
        return next(self._memory)


class FakeWriter:
    """Binary writer that records data and can start failing after N writes."""

    def __init__(self, fail_after=None, fail_on_flush=False):
        self.data = bytearray()
        self.writes = 0
        self.closed = False
        self._fail_after = fail_after
        self._fail_on_flush = fail_on_flush

    def write(self, data):
        if self._fail_after is not None and self.writes >= self._fail_after:
            raise BrokenPipeError(32, "Broken pipe")
        self.writes += 1
        self.data += data
        return len(data)

    def flush(self):
        if self._fail_on_flush:
            raise ConnectionResetError(104, "Connection reset by peer")

    def close(self):
        self.closed = True


class FakeSocket:
    def __init__(self, writer=None):
        self.writer = writer or FakeWriter()
        self.closed = False

    def makefile(self, mode):
        assert mode == "wb"
        return self.writer

    def close(self):
        self.closed = True


class FakeConnector:
    """Hands out prepared sockets, or raises prepared errors, in order."""

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.calls = []

    def __call__(self, address, timeout):
        self.calls.append((address, timeout))
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def fake_socket():
    return FakeSocket


@pytest.fixture
def fake_writer():
    return FakeWriter


@pytest.fixture
def fake_connector():
    return FakeConnector

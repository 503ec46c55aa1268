"""Tests for the terminal presenter."""

import io

import pytest
from rich.console import Console

from telemetry_stream.server.presenter import Presenter, format_memory, format_metric


@pytest.mark.parametrize("kb, expected", [
    (0, "0.00 KB"),
    (500, "500.00 KB"),
    (1023.99, "1023.99 KB"),
    (1024, "1.00 MB"),
    (2048, "2.00 MB"),
    (1_048_575, "1024.00 MB"),
    (1_048_576, "1.00 GB"),
    (2_097_152, "2.00 GB"),
])
def test_format_memory(kb, expected):
    assert format_memory(kb) == expected


@pytest.mark.parametrize("name, value, expected", [
    ("CPU", 23.456, ("CPU", "23.5%")),
    ("cpu", 5, ("CPU", "5.0%")),
    ("MEM", 2048, ("Memory", "2.00 MB")),
    ("Memory", 500, ("Memory", "500.00 KB")),
    ("DISK", 71.25, ("Disk", "71.2%")),
    ("storage", 10, ("Disk", "10.0%")),
    ("NET", 1.5, ("Network", "1.50 MB/s")),
    ("network", 0, ("Network", "0.00 MB/s")),
    ("TEMP", 61.04, ("Temperature", "61.0°C")),
    ("temperature", 40, ("Temperature", "40.0°C")),
    ("GPU", 3.14159, ("GPU", "3.14")),
])
def test_format_metric(name, value, expected):
    assert format_metric(name, value) == expected


def _presenter():
    out = io.StringIO()
    console = Console(file=out, width=100, color_system=None)
    return Presenter(console, clear_screen=False), out


def test_present_sample():
    presenter, out = _presenter()
    presenter.present({"CPU": 45.5, "MEM": 2_097_152.0, "GPU": 1.0}, "127.0.0.1:50000")
    text = out.getvalue()
    assert "127.0.0.1:50000" in text
    assert "45.5%" in text
    assert "2.00 GB" in text
    assert "GPU" in text


def test_present_keeps_sample_order():
    presenter, _ = _presenter()
    table = presenter.build_table({"MEM": 1.0, "CPU": 2.0}, "peer")
    assert [cell.plain for cell in table.columns[0].cells] == ["Memory", "CPU"]


def test_present_empty_sample():
    presenter, out = _presenter()
    presenter.present({}, "peer:1")
    assert "No metrics received from peer:1" in out.getvalue()


def test_metric_names_are_not_markup():
    """Any key the decoder accepts renders literally, brackets included."""
    presenter, out = _presenter()
    presenter.present({"[/]": 1.0, "[bold": 2.0, "[red]x[/red]": 3.0}, "[peer]:1")
    text = out.getvalue()
    assert "[/]" in text
    assert "[bold" in text
    assert "[red]x[/red]" in text
    assert "[peer]:1" in text


def test_empty_sample_peer_is_not_markup():
    presenter, out = _presenter()
    presenter.present({}, "[/]")
    assert "No metrics received from [/]" in out.getvalue()

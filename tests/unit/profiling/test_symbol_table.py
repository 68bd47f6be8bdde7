"""Unit tests for the per-symbol statistics table."""

from __future__ import annotations

import logging

import pytest

from perf_pps_stats.data.models import MeasurementContext
from perf_pps_stats.profiling.symbol_table import SymbolStatsTable, TableFrozenError


def _table() -> SymbolStatsTable:
    ctx = MeasurementContext(pps=1_000_000, cpu="3")
    return SymbolStatsTable(ctx.nanosec_per_event)


def test_nanosec_per_event_from_pps() -> None:
    assert _table().nanosec_per_event == pytest.approx(1000.0)


def test_record_new_symbol() -> None:
    t = _table()
    entry = t.record(50.0, "foo")
    assert entry.percent == pytest.approx(50.0)
    assert entry.nanosec == pytest.approx(500.0)
    assert t.percent_sum == pytest.approx(50.0)
    assert t.nanosec_sum == pytest.approx(500.0)


def test_duplicate_symbol_is_merged(caplog: pytest.LogCaptureFixture) -> None:
    t = _table()
    t.record(50.0, "foo")
    t.record(10.0, "bar")
    before = t.nanosec_sum
    with caplog.at_level(logging.WARNING):
        entry = t.record(25.0, "foo")
    assert entry.percent == pytest.approx(75.0)
    assert entry.nanosec == pytest.approx(750.0)
    assert entry.lines == 2
    assert t.nanosec_sum == pytest.approx(before - 500.0 + 750.0)
    assert t.percent_sum == pytest.approx(85.0)
    assert len(t) == 2
    assert "function foo double defined (25.00)" in caplog.text


def test_same_pair_twice_doubles_percent() -> None:
    t = _table()
    t.record(12.5, "foo")
    t.record(12.5, "foo")
    entry = t.get("foo")
    assert entry is not None
    assert entry.percent == pytest.approx(25.0)
    assert entry.nanosec == pytest.approx(t.nanosec_per_event * 25.0 / 100)
    assert t.nanosec_sum == pytest.approx(entry.nanosec)


def test_nanosec_invariant_holds_after_every_record() -> None:
    t = SymbolStatsTable(1e9 / 2_345_678)
    rows = [(3.1, "a"), (0.07, "b"), (1.9, "a"), (0.01, "c"), (0.02, "b"), (4.4, "a")]
    for percent, symbol in rows:
        t.record(percent, symbol)
        for e in t.entries():
            assert e.nanosec == pytest.approx(t.nanosec_per_event * e.percent / 100)
        assert t.nanosec_sum == pytest.approx(sum(e.nanosec for e in t.entries()))
        assert t.percent_sum == pytest.approx(sum(e.percent for e in t.entries()))


def test_totals_and_order() -> None:
    t = _table()
    t.record(1.0, "z")
    t.record(2.0, "a")
    t.note_unparsed()
    totals = t.totals()
    assert t.symbols() == ["z", "a"]
    assert totals.symbols == 2
    assert totals.parsed_lines == 2
    assert totals.unparsed_lines == 1
    assert totals.percent_sum == pytest.approx(3.0)
    assert "z" in t and "missing" not in t
    assert t.get("missing") is None


def test_frozen_table_rejects_record() -> None:
    t = _table()
    t.record(1.0, "a")
    t.freeze()
    with pytest.raises(TableFrozenError):
        t.record(1.0, "b")

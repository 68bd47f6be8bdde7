"""Per-symbol statistics table.

`SymbolStatsTable` accumulates parsed report rows into `SymbolEntry` records
and keeps running percent/nanosecond sums. A symbol reported on several rows
(perf splits samples e.g. by command) is merged: its percent accumulates and
its nanosecond cost is recomputed from the merged percent, so the running
nanosecond sum never double counts.
"""

from __future__ import annotations

import logging
from typing import Iterator

from perf_pps_stats.data.models import ReportTotals, SymbolEntry

logger = logging.getLogger(__name__)


class TableFrozenError(RuntimeError):
    """Raised when recording into a table after collection completed."""


class SymbolStatsTable:
    """Mapping of symbol name to cumulative attribution plus running sums.

    Member variables are prefixed with ``m_``; read access goes through
    properties and accessor methods.

    Parameters
    ----------
    nanosec_per_event : float
        Nanoseconds per event derived from the measured rate.

    Examples
    --------
    >>> t = SymbolStatsTable(1000.0)
    >>> t.record(50.0, "foo").nanosec
    500.0
    >>> t.record(25.0, "foo").nanosec
    750.0
    """

    def __init__(self, nanosec_per_event: float) -> None:
        self.m_nanosec_per_event: float = float(nanosec_per_event)
        self.m_entries: dict[str, SymbolEntry] = {}
        self.m_percent_sum: float = 0.0
        self.m_nanosec_sum: float = 0.0
        self.m_parsed_lines: int = 0
        self.m_unparsed_lines: int = 0
        self.m_frozen: bool = False

    @property
    def nanosec_per_event(self) -> float:
        return self.m_nanosec_per_event

    @property
    def percent_sum(self) -> float:
        return self.m_percent_sum

    @property
    def nanosec_sum(self) -> float:
        return self.m_nanosec_sum

    @property
    def frozen(self) -> bool:
        return self.m_frozen

    def nanosec_for(self, percent: float) -> float:
        """Return the nanosecond cost of ``percent`` of one event."""

        return self.m_nanosec_per_event * (percent / 100)

    def record(self, percent: float, symbol: str) -> SymbolEntry:
        """Add one report row for ``symbol``.

        Parameters
        ----------
        percent : float
            Self-time percent of the row.
        symbol : str
            Symbol name (last column of the row).

        Returns
        -------
        SymbolEntry
            The (possibly merged) entry for ``symbol``.

        Raises
        ------
        TableFrozenError
            If the table was frozen after collection.
        """

        if self.m_frozen:
            raise TableFrozenError(f"cannot record {symbol!r}: symbol table is frozen")
        percent = float(percent)
        entry = self.m_entries.get(symbol)
        if entry is None:
            entry = SymbolEntry(symbol=symbol, percent=percent, nanosec=self.nanosec_for(percent), lines=1)
            self.m_entries[symbol] = entry
        else:
            logger.warning("***WARN***: function %s double defined (%.2f)", symbol, percent)
            self.m_nanosec_sum -= entry.nanosec
            entry.percent += percent
            entry.nanosec = self.nanosec_for(entry.percent)
            entry.lines += 1
        self.m_percent_sum += percent
        self.m_nanosec_sum += entry.nanosec
        self.m_parsed_lines += 1
        return entry

    def note_unparsed(self) -> None:
        """Count a report line that did not parse."""

        self.m_unparsed_lines += 1

    def freeze(self) -> None:
        """Mark collection complete; further `record` calls raise."""

        self.m_frozen = True

    def get(self, symbol: str) -> SymbolEntry | None:
        return self.m_entries.get(symbol)

    def symbols(self) -> list[str]:
        """Return all symbol names in first-seen order."""

        return list(self.m_entries)

    def entries(self) -> Iterator[SymbolEntry]:
        return iter(self.m_entries.values())

    def totals(self) -> ReportTotals:
        return ReportTotals(
            nanosec_per_event=self.m_nanosec_per_event,
            percent_sum=self.m_percent_sum,
            nanosec_sum=self.m_nanosec_sum,
            symbols=len(self.m_entries),
            parsed_lines=self.m_parsed_lines,
            unparsed_lines=self.m_unparsed_lines,
        )

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.m_entries

    def __len__(self) -> int:
        return len(self.m_entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.m_entries)

"""Group view selection over a symbol table.

Group views are non-exclusive: a symbol may be selected by several groups.
Every selection updates a `VisitedRecord`, which the orchestrator reads at the
end to list symbols no group picked up (the negative report) and symbols picked
up by more than one group.

Functions
---------
compile_patterns
    Compile case-insensitive group patterns, raising `GroupPatternError`.
select_group
    Union of explicit-name hits and pattern hits, deduplicated.
select_all
    Every symbol of the table (the full report).
select_unvisited
    Symbols with no recorded visit (the negative report).
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from perf_pps_stats.profiling.symbol_table import SymbolStatsTable


class GroupPatternError(ValueError):
    """Raised when a group pattern is not a valid regular expression."""


class VisitedRecord:
    """Visit counts per symbol across group views of one run."""

    def __init__(self) -> None:
        self.m_counts: dict[str, int] = {}

    def visit(self, symbol: str) -> int:
        """Increment and return the visit count of ``symbol``."""

        count = self.m_counts.get(symbol, 0) + 1
        self.m_counts[symbol] = count
        return count

    def count(self, symbol: str) -> int:
        return self.m_counts.get(symbol, 0)

    def reset(self) -> None:
        self.m_counts.clear()

    def overlaps(self) -> list[tuple[str, int]]:
        """Return ``(symbol, count)`` for symbols visited more than once."""

        return [(s, c) for s, c in self.m_counts.items() if c > 1]

    def as_dict(self) -> dict[str, int]:
        return dict(self.m_counts)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.m_counts

    def __len__(self) -> int:
        return len(self.m_counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.m_counts)


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile group patterns case-insensitively.

    Raises
    ------
    GroupPatternError
        If any pattern fails to compile.
    """

    out: list[re.Pattern[str]] = []
    for p in patterns:
        try:
            out.append(re.compile(p, re.IGNORECASE))
        except re.error as exc:
            raise GroupPatternError(f"invalid group pattern {p!r}: {exc}") from exc
    return out


def select_group(
    table: SymbolStatsTable,
    functions: Iterable[str],
    patterns: Iterable[str],
    visited: VisitedRecord,
) -> set[str]:
    """Select the symbols of one group view.

    Parameters
    ----------
    table : SymbolStatsTable
        Collected report.
    functions : iterable of str
        Explicit symbol names; names absent from the table are skipped.
    patterns : iterable of str
        Regular expressions searched (unanchored, case-insensitive) in every
        symbol name.
    visited : VisitedRecord
        Incremented once per symbol added by this call.

    Returns
    -------
    set of str
        Deduplicated selection; ordering is left to the reporter.
    """

    selected: set[str] = set()

    def _add(symbol: str) -> None:
        if symbol not in selected:
            selected.add(symbol)
            visited.visit(symbol)

    for name in functions:
        if name in table:
            _add(name)
    all_symbols = table.symbols()
    for rx in compile_patterns(patterns):
        for symbol in all_symbols:
            if rx.search(symbol):
                _add(symbol)
    return selected


def select_all(table: SymbolStatsTable, visited: VisitedRecord) -> set[str]:
    """Select every symbol of the table, recording a visit for each."""

    return select_group(table, table.symbols(), [], visited)


def select_unvisited(table: SymbolStatsTable, visited: VisitedRecord) -> set[str]:
    """Return symbols that no group view selected."""

    return {s for s in table.symbols() if s not in visited}

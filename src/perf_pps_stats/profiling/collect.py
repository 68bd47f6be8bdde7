"""Report collection: feed `perf report` output into a symbol table.

Functions
---------
collect_report
    Parse an iterable of report lines into a frozen `SymbolStatsTable`.
report_stream
    Context manager running a report command and yielding its stdout lines.
collect_from_command
    Run `perf report` (or any command printing the same shape) and collect.
collect_from_file
    Collect from a saved report text file, or ``-`` for stdin.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from perf_pps_stats.profiling.report_parse import iter_report_lines
from perf_pps_stats.profiling.symbol_table import SymbolStatsTable

logger = logging.getLogger(__name__)


def collect_report(lines: Iterable[str], nanosec_per_event: float, *, verbosity: int = 0) -> SymbolStatsTable:
    """Parse report lines into a symbol table.

    Parameters
    ----------
    lines : iterable of str
        Raw `perf report --stdio` output.
    nanosec_per_event : float
        Nanoseconds per event derived from the measured rate.
    verbosity : int, default 0
        ``> 1`` logs lines that did not parse, ``> 2`` also logs parsed lines.

    Returns
    -------
    SymbolStatsTable
        Frozen table; unparsed lines are counted but otherwise ignored.
    """

    table = SymbolStatsTable(nanosec_per_event)
    for line, parsed in iter_report_lines(lines):
        if parsed is None:
            table.note_unparsed()
            if verbosity > 1:
                logger.info('WARN: could not parse line:"%s"', line)
            continue
        table.record(parsed.percent, parsed.symbol)
        if verbosity > 2:
            logger.info(
                'PARSED: %s =>\n\tp:"%s" skip:"%s" sym:"%s"',
                line,
                parsed.percent,
                parsed.descriptor,
                parsed.symbol,
            )
    table.freeze()
    totals = table.totals()
    if totals.parsed_lines == 0:
        logger.warning("No perf report lines parsed (unparsed: %d)", totals.unparsed_lines)
    return table


@contextmanager
def report_stream(cmd: Sequence[str]) -> Iterator[Iterator[str]]:
    """Run ``cmd`` and yield an iterator over its stdout lines.

    The pipe is closed and the child reaped on every exit path. A non-zero
    exit status is logged, not raised; whatever was printed is still used.
    """

    logger.info("Running: %s", " ".join(cmd))
    proc = subprocess.Popen(list(cmd), stdout=subprocess.PIPE, text=True, errors="replace")
    assert proc.stdout is not None
    try:
        yield iter(proc.stdout)
    finally:
        proc.stdout.close()
        rc = proc.wait()
        if rc != 0:
            logger.warning("Command exited with status %d: %s", rc, " ".join(cmd))


def collect_from_command(cmd: Sequence[str], nanosec_per_event: float, *, verbosity: int = 0) -> SymbolStatsTable:
    """Collect a symbol table from a report command's stdout."""

    with report_stream(cmd) as lines:
        return collect_report(lines, nanosec_per_event, verbosity=verbosity)


def collect_from_file(path: str | Path, nanosec_per_event: float, *, verbosity: int = 0) -> SymbolStatsTable:
    """Collect a symbol table from a saved report (``-`` reads stdin)."""

    if str(path) == "-":
        return collect_report(sys.stdin, nanosec_per_event, verbosity=verbosity)
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return collect_report(f, nanosec_per_event, verbosity=verbosity)

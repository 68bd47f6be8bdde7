"""Rendering of symbol views and Markdown export.

Functions
---------
sort_symbols
    Order symbols by descending percent, name ascending on ties.
render_view
    Print one view (rows, cutoff notice, summary line) and return a summary.
write_views_markdown
    Emit all rendered views of a run as Markdown tables using mdutils.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Iterable, TextIO

from mdutils.mdutils import MdUtils  # type: ignore[import-untyped]

from perf_pps_stats.data.models import MeasurementContext, ViewRow, ViewSummary
from perf_pps_stats.profiling.symbol_table import SymbolStatsTable


def sort_symbols(table: SymbolStatsTable, symbols: Iterable[str]) -> list[str]:
    """Return ``symbols`` sorted by descending percent (ties: name ascending).

    Symbols missing from ``table`` are dropped.
    """

    present = [s for s in symbols if s in table]
    return sorted(present, key=lambda s: (-table.get(s).percent, s))  # type: ignore[union-attr]


def render_view(
    table: SymbolStatsTable,
    symbols: Iterable[str],
    limit: float = 0.0,
    *,
    header: str = "",
    out: TextIO | None = None,
) -> ViewSummary:
    """Print a view of ``symbols`` and return what was printed.

    Parameters
    ----------
    table : SymbolStatsTable
        Collected report providing per-symbol percent and nanoseconds.
    symbols : iterable of str
        Selection to print (unordered).
    limit : float, default=0.0
        Stop at the first symbol whose percent is below ``limit``. ``0`` never
        truncates.
    header : str, optional
        Line printed before the rows.
    out : TextIO or None, optional
        Destination stream; defaults to ``sys.stdout`` at call time.

    Returns
    -------
    ViewSummary
        Printed rows, stop symbol and the reconciled sums.

    Notes
    -----
    The summary line shows both ``calc`` (total ns/event times the accumulated
    percent) and ``sum`` (accumulated per-row nanoseconds); a gap between the
    two reveals rounding drift in low-percent rows.
    """

    stream = out if out is not None else sys.stdout
    summary = ViewSummary(header=header, limit=float(limit), nanosec_per_event=table.nanosec_per_event)
    if header:
        print(header, file=stream)

    for symbol in sort_symbols(table, symbols):
        entry = table.get(symbol)
        assert entry is not None
        if limit > 0 and entry.percent < limit:
            print(f' (Percent limit({limit:g}%) stop at "{symbol}")', file=stream)
            summary.stopped_at = symbol
            break
        summary.percent_sum += entry.percent
        summary.nanosec_sum += entry.nanosec
        summary.rows.append(ViewRow(symbol=symbol, percent=entry.percent, nanosec=entry.nanosec))
        print(f" {entry.percent:5.2f} % ~= {entry.nanosec:4.1f} ns <= {symbol}", file=stream)

    summary.calc_nanosec = table.nanosec_for(summary.percent_sum)
    print(
        f" Sum: {summary.percent_sum:5.2f} % => calc: {summary.calc_nanosec:.1f} ns"
        f" (sum: {summary.nanosec_sum:.1f} ns) => Total: {table.nanosec_per_event:.1f} ns\n",
        file=stream,
    )
    return summary


def write_views_markdown(path: str, ctx: MeasurementContext, views: list[ViewSummary]) -> None:
    """Write rendered views as Markdown tables using mdutils.

    Parameters
    ----------
    path : str
        Destination file path. A ``.md`` suffix is stripped because mdutils
        appends it.
    ctx : MeasurementContext
        Run inputs listed at the top of the document.
    views : list of ViewSummary
        Views in the order they were printed.
    """

    file_base = path[:-3] if path.endswith(".md") else path
    md = MdUtils(file_name=file_base)
    md.new_header(level=1, title="perf report PPS attribution")
    md.new_list(
        items=[
            f"Generated: {datetime.now().isoformat(timespec='seconds')}",
            f"PPS: {ctx.pps:.0f}",
            f"CPU: {ctx.cpu}",
            f"ns per event: {ctx.nanosec_per_event:.1f}",
        ]
    )
    for view in views:
        title = view.header.rstrip(":").strip() or "View"
        md.new_header(level=2, title=title)
        if view.rows:
            table_data: list[str] = ["percent", "ns", "symbol"]
            for r in view.rows:
                table_data.extend([f"{r.percent:.2f}", f"{r.nanosec:.1f}", r.symbol])
            md.new_table(columns=3, rows=len(view.rows) + 1, text=table_data, text_align="left")
        else:
            md.new_paragraph("No symbols.")
        if view.stopped_at is not None:
            md.new_paragraph(f"Stopped at `{view.stopped_at}` (limit {view.limit:g}%).")
        md.new_paragraph(
            f"Sum: {view.percent_sum:.2f} % => calc: {view.calc_nanosec:.1f} ns "
            f"(sum: {view.nanosec_sum:.1f} ns) => Total: {view.nanosec_per_event:.1f} ns"
        )
    md.create_md_file()

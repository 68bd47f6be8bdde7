"""`perf report --stdio` line parsing.

Functions
---------
parse_report_line
    Convert one report row into a `ReportLine`, or ``None`` when the line does
    not have the ``NN.NN%  <descriptor> <symbol>`` shape.
iter_report_lines
    Parse an iterable of lines, yielding ``(raw_line, ReportLine | None)``.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from perf_pps_stats.data.models import ReportLine

# Example of a line to match:
#     18.93%  ksoftirqd/3    [kernel.vmlinux]  [k] __napi_alloc_skb
# Only the percent and the trailing symbol are kept; the command column can
# contain whitespace, so the middle is matched coarsely.
REPORT_LINE_RE = re.compile(r"\s+(\d+\.\d+)%\s\s(.+)\s+(\S+)\s*$")


def parse_report_line(line: str) -> ReportLine | None:
    """Parse one `perf report` row.

    Parameters
    ----------
    line : str
        Raw report line; a trailing newline is ignored.

    Returns
    -------
    ReportLine or None
        The parsed percent/symbol pair, or ``None`` for headers, comments,
        blank lines and anything else without the expected shape.

    Examples
    --------
    >>> parse_report_line("    18.93%  ksoftirqd/3  [kernel.vmlinux]  [k] __napi_alloc_skb").symbol
    '__napi_alloc_skb'
    >>> parse_report_line("# Samples: 10K of event 'cycles'") is None
    True
    """

    m = REPORT_LINE_RE.search(line.rstrip("\r\n"))
    if m is None:
        return None
    return ReportLine(percent=float(m.group(1)), symbol=m.group(3), descriptor=m.group(2).strip())


def iter_report_lines(lines: Iterable[str]) -> Iterator[tuple[str, ReportLine | None]]:
    """Yield ``(line, parsed)`` for each input line, newline stripped."""

    for raw in lines:
        line = raw.rstrip("\r\n")
        yield line, parse_report_line(line)

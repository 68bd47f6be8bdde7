"""Domain data models for PPS-based perf report attribution.

This module defines `attrs`-based data models for the attribution domain.
These are internal representations; the CLI-facing request contract lives in
`perf_pps_stats.contracts.models` and group definitions are structured from
Hydra config with `cattrs` (see `perf_pps_stats.contracts.convert`).

Classes
-------
MeasurementContext
    Rate, CPU and default cutoff for one run.
ReportLine
    A single parsed `perf report` row.
SymbolEntry
    Cumulative percent and nanosecond cost for one symbol.
ReportTotals
    Aggregate counters of a symbol table.
GroupViewDefinition
    Explicit function list plus regex patterns for a group view.
ViewRow
    One printed row of a rendered view.
ViewSummary
    Result of rendering one view.
"""

from __future__ import annotations

from attrs import define, field
from attrs.validators import ge, gt, instance_of

NANOSEC_PER_SEC = 10**9


def _str_or_none(value: object) -> str | None:
    """Convert ids given as int to str, keep ``None`` for validation."""

    return None if value is None else str(value)


def _non_empty(_: object, attr: object, value: str) -> None:
    """Reject empty or whitespace-only strings."""

    if not str(value).strip():
        name = getattr(attr, "name", "value")
        raise ValueError(f"{name} must be a non-empty string")


@define(kw_only=True, frozen=True)
class MeasurementContext:
    """Process-wide measurement inputs.

    Parameters
    ----------
    pps : float
        Measured steady-state rate in packets (events) per second; must be > 0.
    cpu : str
        The single CPU the report is restricted to. Opaque to the engine.
    limit : float, default=0.10
        Default display cutoff percent for the full report.
    """

    pps: float = field(converter=float, validator=[gt(0.0)])
    cpu: str = field(converter=_str_or_none, validator=[instance_of(str), _non_empty])
    limit: float = field(default=0.10, converter=float, validator=[ge(0.0)])

    @property
    def nanosec_per_event(self) -> float:
        """Nanoseconds available per event at the measured rate."""

        return NANOSEC_PER_SEC / self.pps


@define(kw_only=True, frozen=True)
class ReportLine:
    """Parsed `perf report` row.

    Only ``percent`` and ``symbol`` are used for attribution; ``descriptor``
    holds the skipped middle columns (command, DSO, privilege marker).
    """

    percent: float = field(validator=[instance_of(float), ge(0.0)])
    symbol: str = field(validator=[instance_of(str), _non_empty])
    descriptor: str = field(default="", validator=[instance_of(str)])


@define(kw_only=True)
class SymbolEntry:
    """Cumulative attribution for one symbol.

    ``nanosec`` is owned by `SymbolStatsTable`, which recomputes it from the
    cumulative ``percent`` on every record.
    """

    symbol: str = field(validator=[instance_of(str)])
    percent: float = field(default=0.0, validator=[instance_of(float)])
    nanosec: float = field(default=0.0, validator=[instance_of(float)])
    lines: int = field(default=0, validator=[instance_of(int)])


@define(kw_only=True, frozen=True)
class ReportTotals:
    """Aggregate counters for a symbol table."""

    nanosec_per_event: float = field(validator=[instance_of(float)])
    percent_sum: float = field(validator=[instance_of(float)])
    nanosec_sum: float = field(validator=[instance_of(float)])
    symbols: int = field(validator=[instance_of(int)])
    parsed_lines: int = field(default=0, validator=[instance_of(int)])
    unparsed_lines: int = field(default=0, validator=[instance_of(int)])


@define(kw_only=True, frozen=True)
class GroupViewDefinition:
    """A named, non-exclusive view over the symbol table.

    Parameters
    ----------
    title : str
        Header text. Empty for ad-hoc "related to pattern" groups, whose header
        is derived from the patterns.
    functions : list[str]
        Explicit symbol names included when present in the report.
    patterns : list[str]
        Case-insensitive regular expressions matched against every symbol.
    limit : float, default=0.0
        Display cutoff percent; 0 never truncates.
    """

    title: str = field(default="", validator=[instance_of(str)])
    functions: list[str] = field(factory=list)
    patterns: list[str] = field(factory=list)
    limit: float = field(default=0.0, converter=float, validator=[ge(0.0)])

    @property
    def header(self) -> str:
        if self.title:
            return f"Group-report: {self.title} ::"
        return f'Group-report: related to pattern "{"+".join(self.patterns)}" ::'


@define(kw_only=True, frozen=True)
class ViewRow:
    """One printed row of a view."""

    symbol: str = field(validator=[instance_of(str)])
    percent: float = field(validator=[instance_of(float)])
    nanosec: float = field(validator=[instance_of(float)])


@define(kw_only=True)
class ViewSummary:
    """Outcome of rendering one view.

    Parameters
    ----------
    header : str
        Header line printed before the view (may be empty).
    rows : list[ViewRow]
        Rows printed, in display order.
    stopped_at : str or None
        Symbol at which the cutoff stopped the listing, if any.
    limit : float
        Cutoff used.
    percent_sum : float
        Accumulated percent of the printed rows.
    nanosec_sum : float
        Directly accumulated nanoseconds of the printed rows.
    calc_nanosec : float
        ``nanosec_per_event * percent_sum / 100``.
    nanosec_per_event : float
        Total nanoseconds per event of the table.
    """

    header: str = field(default="", validator=[instance_of(str)])
    rows: list[ViewRow] = field(factory=list)
    stopped_at: str | None = field(default=None)
    limit: float = field(default=0.0, validator=[instance_of(float)])
    percent_sum: float = field(default=0.0, validator=[instance_of(float)])
    nanosec_sum: float = field(default=0.0, validator=[instance_of(float)])
    calc_nanosec: float = field(default=0.0, validator=[instance_of(float)])
    nanosec_per_event: float = field(default=0.0, validator=[instance_of(float)])

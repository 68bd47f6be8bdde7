"""Domain models for ``perf_pps_stats``.

This package hosts the attrs-based records shared by the parser, symbol table,
group engine and reporter.
"""

from __future__ import annotations

from .models import (
    GroupViewDefinition,
    MeasurementContext,
    ReportLine,
    ReportTotals,
    SymbolEntry,
    ViewRow,
    ViewSummary,
)

__all__ = [
    "MeasurementContext",
    "ReportLine",
    "SymbolEntry",
    "ReportTotals",
    "GroupViewDefinition",
    "ViewRow",
    "ViewSummary",
]

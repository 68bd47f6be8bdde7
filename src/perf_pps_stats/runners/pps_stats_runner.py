"""PPS attribution runner: collection plus the fixed sequence of views.

Flow
----
1) Collect the perf report into a `SymbolStatsTable` (one pass).
2) Print the full "ALL functions" view with the configured limit.
3) Reset the visited record so it only reflects the group views.
4) Print every configured group view (limit 0) in order.
5) List symbols shown by more than one group, then print the negative view:
   symbols no group picked up.

Group definitions come from the Hydra config tree shipped in
`perf_pps_stats.conf` (see ``conf/groups/``); the command line wrapper is
`perf_pps_stats.runners.pps_stats_main`.
"""

from __future__ import annotations

import logging
import sys
from typing import List, TextIO

from attrs import define, field
from hydra import compose, initialize_config_module
from omegaconf import DictConfig

from perf_pps_stats.contracts.convert import dump_state, groups_from_config
from perf_pps_stats.data.models import GroupViewDefinition, MeasurementContext, ViewSummary
from perf_pps_stats.profiling.collect import collect_from_command, collect_from_file
from perf_pps_stats.profiling.export import render_view, write_views_markdown
from perf_pps_stats.profiling.groups import VisitedRecord, select_all, select_group, select_unvisited
from perf_pps_stats.profiling.symbol_table import SymbolStatsTable
from perf_pps_stats.profiling.vendor.checks import ensure_perf
from perf_pps_stats.profiling.vendor.perf import build_perf_report_cmd

logger = logging.getLogger(__name__)

ALL_HEADER = "Report: ALL functions ::"
NEGATIVE_HEADER = "Negative Report: functions NOT included in group reports::"
CONFIG_MODULE = "perf_pps_stats.conf"


@define(kw_only=True)
class RunResult:
    """Views printed by one run and the final visited record."""

    table: SymbolStatsTable = field()
    views: list[ViewSummary] = field(factory=list)
    visited: VisitedRecord = field(factory=VisitedRecord)
    negative: set[str] = field(factory=set)


def load_config(overrides: List[str] | None = None, *, config_name: str = "config") -> DictConfig:
    """Compose the run config from the packaged ``perf_pps_stats.conf`` tree."""

    overrides = overrides or []
    with initialize_config_module(config_module=CONFIG_MODULE, version_base=None):
        cfg: DictConfig = compose(config_name=str(config_name), overrides=overrides)
    return cfg


def collect_table(ctx: MeasurementContext, cfg: DictConfig) -> SymbolStatsTable:
    """Collect the report named by ``cfg`` (saved file or live `perf report`)."""

    verbosity = int(cfg.get("debug", 0) or 0)
    report_file = cfg.get("report_file")
    if report_file:
        logger.info("Reading perf report text from %s", report_file)
        return collect_from_file(str(report_file), ctx.nanosec_per_event, verbosity=verbosity)

    perf_cfg = cfg.get("perf", {}) or {}
    binary = str(perf_cfg.get("binary", "perf"))
    sudo = bool(perf_cfg.get("sudo", True))
    ensure_perf(binary, sudo=sudo)
    cmd = build_perf_report_cmd(
        ctx.cpu,
        binary=binary,
        sudo=sudo,
        input_path=perf_cfg.get("input"),
        extra_args=list(perf_cfg.get("extra_args", []) or []),
    )
    return collect_from_command(cmd, ctx.nanosec_per_event, verbosity=verbosity)


def run_views(
    table: SymbolStatsTable,
    groups: list[GroupViewDefinition],
    ctx: MeasurementContext,
    *,
    dumper: bool = False,
    out: TextIO | None = None,
) -> RunResult:
    """Print the full view, every group view and the negative view.

    Parameters
    ----------
    table : SymbolStatsTable
        Collected report.
    groups : list of GroupViewDefinition
        Detailed group views, printed in order.
    ctx : MeasurementContext
        Run inputs; ``ctx.limit`` applies to the full view only.
    dumper : bool, default False
        Print the visited record and PPS/ns before the negative view.
    out : TextIO or None, optional
        Destination stream; defaults to ``sys.stdout`` at call time.

    Returns
    -------
    RunResult
        Rendered view summaries, final visited record and negative selection.
    """

    stream = out if out is not None else sys.stdout
    result = RunResult(table=table)
    visited = result.visited

    full = select_all(table, visited)
    result.views.append(render_view(table, full, ctx.limit, header=ALL_HEADER, out=stream))
    # Only the group views count towards the negative report.
    visited.reset()

    for g in groups:
        selected = select_group(table, g.functions, g.patterns, visited)
        result.views.append(render_view(table, selected, g.limit, header=g.header, out=stream))

    if dumper:
        print(dump_state(ctx, visited), file=stream)
        print(f"Total PPS:{ctx.pps:.0f} NANOSEC:{ctx.nanosec_per_event:g}", file=stream)

    for symbol, count in visited.overlaps():
        print(f"Double(cnt:{count}) displayed function: {symbol}", file=stream)
    result.negative = select_unvisited(table, visited)
    result.views.append(render_view(table, result.negative, 0.0, header=NEGATIVE_HEADER, out=stream))
    return result


def run(ctx: MeasurementContext, cfg: DictConfig, *, out: TextIO | None = None) -> RunResult:
    """Collect the report and print all views; optionally write Markdown."""

    groups = groups_from_config(cfg.get("groups", []))
    table = collect_table(ctx, cfg)
    totals = table.totals()
    logger.debug(
        "Collected %d symbols from %d lines (%d unparsed)",
        totals.symbols,
        totals.parsed_lines,
        totals.unparsed_lines,
    )
    result = run_views(table, groups, ctx, dumper=bool(cfg.get("dumper", False)), out=out)
    md_path = cfg.get("markdown")
    if md_path:
        write_views_markdown(str(md_path), ctx, result.views)
        logger.info("Wrote Markdown report: %s", md_path)
    return result

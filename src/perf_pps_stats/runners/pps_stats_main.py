"""Command line entry point: derive per-function ns cost from perf report.

This entry point accepts arguments mirroring the `PpsStatsRequest` contract,
composes the packaged Hydra config with the matching overrides and
dispatches a run via `perf_pps_stats.runners.pps_stats_runner`.

Examples
--------
Live report of CPU 3 measured at 2.2 Mpps:
    perf-pps-stats --pps 2200000 --cpu 3

From a saved report, with a Markdown copy:
    perf-pps-stats --pps 2200000 --cpu 3 --report-file report.txt --markdown out.md
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from perf_pps_stats.contracts.convert import context_from_request
from perf_pps_stats.contracts.models import PpsStatsRequest
from perf_pps_stats.runners.pps_stats_runner import load_config, run
from perf_pps_stats.utils.paths import resolve_cli_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perf-pps-stats",
        description="From a PPS measurement derive per-function nanosecond cost using perf report.",
    )
    parser.add_argument("--pps", type=str, default=None, help="Input PPS (packets per sec) measurement")
    parser.add_argument("--cpu", type=str, default=None, help="Single CPU the report is limited to")
    parser.add_argument("--limit", type=float, default=None, help="Stop the full report when percent goes below this")
    parser.add_argument("--debug", type=int, default=None, help="Verbosity: >1 unparsed lines, >2 parsed lines")
    parser.add_argument(
        "--dumper",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Dump internal state before the negative report",
    )
    parser.add_argument("--report-file", type=str, default=None, help="Saved perf report text instead of running perf ('-' for stdin)")
    parser.add_argument("--markdown", type=str, default=None, help="Also write all views to this Markdown file")
    parser.add_argument(
        "--override",
        action="append",
        default=None,
        help="Hydra override in key=value form (e.g., perf.sudo=false, groups=netdev). May be repeated.",
    )
    return parser


def _setup_logging() -> None:
    # Log records go to stdout, interleaved with the report rows.
    logging.captureWarnings(True)
    logging.basicConfig(stream=sys.stdout, level=logging.INFO, format="%(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(list(args.override or []))
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: invalid configuration: {exc}", file=sys.stderr)
        return 1

    cwd = Path.cwd()
    report_file = args.report_file if args.report_file is not None else cfg.get("report_file")
    markdown = args.markdown if args.markdown is not None else cfg.get("markdown")
    try:
        req = PpsStatsRequest(
            pps=args.pps,
            cpu=args.cpu,
            limit=args.limit if args.limit is not None else cfg.limit,
            debug=int(args.debug if args.debug is not None else cfg.debug),
            dumper=bool(args.dumper if args.dumper is not None else cfg.dumper),
            report_file=resolve_cli_path(report_file, cwd),
            markdown=resolve_cli_path(markdown, cwd),
        )
    except (TypeError, ValueError) as exc:
        parser.print_usage(sys.stderr)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    cfg.limit = req.limit
    cfg.debug = req.debug
    cfg.dumper = req.dumper
    cfg.report_file = req.report_file
    cfg.markdown = req.markdown

    _setup_logging()
    try:
        run(context_from_request(req), cfg)
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: perf PPS attribution failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""Command line tests for `perf-pps-stats`."""

from __future__ import annotations

from pathlib import Path

import pytest

from perf_pps_stats.runners import pps_stats_main
from perf_pps_stats.runners.pps_stats_main import main

REPORT = """\
    60.00%  ksoftirqd/3  [kernel.vmlinux]  [k] mlx5e_poll_rx_cq
    30.00%  ksoftirqd/3  [kernel.vmlinux]  [k] kmem_cache_alloc
     5.00%  ksoftirqd/3  [kernel.vmlinux]  [k] mystery
"""


@pytest.mark.parametrize(
    "argv",
    [
        ["--cpu", "3"],
        ["--pps", "1000000"],
        ["--pps", "0", "--cpu", "3"],
        ["--pps", "-5", "--cpu", "3"],
        ["--pps", "fast", "--cpu", "3"],
        ["--pps", "1000000", "--cpu", " "],
    ],
)
def test_missing_or_invalid_inputs_exit_nonzero(argv: list[str], capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_run(*_a: object, **_k: object) -> None:
        raise AssertionError("collection must not start on configuration errors")

    monkeypatch.setattr(pps_stats_main, "run", _no_run)
    assert main(argv) == 1
    err = capsys.readouterr().err
    assert "usage:" in err
    assert "ERROR:" in err


def test_report_file_run(tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    report = tmp_path / "report.txt"
    report.write_text(REPORT, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    rc = main(["--pps", "1000000", "--cpu", "3", "--limit", "10", "--report-file", "report.txt", "--markdown", "views.md"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Report: ALL functions ::" in out
    assert ' (Percent limit(10%) stop at "mystery")' in out
    assert " Sum: 90.00 % => calc: 900.0 ns (sum: 900.0 ns) => Total: 1000.0 ns" in out
    assert "Negative Report: functions NOT included in group reports::" in out
    assert (tmp_path / "views.md").exists()


def test_invalid_override_exits_nonzero(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--pps", "1000000", "--cpu", "3", "--override", "no_such_key=1"]) == 1
    assert "ERROR: invalid configuration" in capsys.readouterr().err


def test_missing_pps_message(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--cpu", "3"]) == 1
    assert "ERROR: pps must be given" in capsys.readouterr().err

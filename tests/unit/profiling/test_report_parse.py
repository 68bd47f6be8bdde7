"""Unit tests for `perf report` line parsing."""

from __future__ import annotations

import pytest

from perf_pps_stats.profiling.report_parse import iter_report_lines, parse_report_line


def test_parse_kernel_symbol_row() -> None:
    parsed = parse_report_line("    18.93%  ksoftirqd/3    [kernel.vmlinux]  [k] __napi_alloc_skb\n")
    assert parsed is not None
    assert parsed.percent == pytest.approx(18.93)
    assert parsed.symbol == "__napi_alloc_skb"
    assert "ksoftirqd/3" in parsed.descriptor


def test_parse_command_with_whitespace_and_trailing_spaces() -> None:
    parsed = parse_report_line("     0.42%  kworker/u16:1 xyz  libc-2.31.so  [.] __memcpy_avx_unaligned   ")
    assert parsed is not None
    assert parsed.percent == pytest.approx(0.42)
    assert parsed.symbol == "__memcpy_avx_unaligned"


@pytest.mark.parametrize(
    "line",
    [
        "",
        "#",
        "# Samples: 103K of event 'cycles:ppp'",
        "# Overhead  Command      Shared Object      Symbol",
        "    18.93% ksoftirqd/3 [kernel.vmlinux] [k] one_space_after_percent",
        "    18%  ksoftirqd/3  [kernel.vmlinux]  [k] no_decimals",
        "18.93%  ksoftirqd/3  [k] no_leading_whitespace",
        "    18.93%  only_one_token",
    ],
)
def test_rejects_lines_without_report_shape(line: str) -> None:
    assert parse_report_line(line) is None


def test_iter_report_lines_keeps_rejected_lines() -> None:
    lines = ["# header\n", "    50.00%  cmd  [kernel.vmlinux]  [k] foo\n"]
    out = list(iter_report_lines(lines))
    assert [raw for raw, _ in out] == ["# header", "    50.00%  cmd  [kernel.vmlinux]  [k] foo"]
    assert out[0][1] is None
    assert out[1][1] is not None and out[1][1].symbol == "foo"

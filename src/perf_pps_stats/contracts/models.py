"""Contract models (attrs-based schemas).

This module defines the request schema accepted by the command line entry
point. Validation happens at construction so that configuration errors abort
before `perf` is invoked.

Notes
-----
- Filesystem paths are absolute; validators enforce this where applicable.
  ``-`` is accepted for ``report_file`` and means stdin.
"""

from __future__ import annotations

import os

from attrs import define, field
from attrs.validators import ge, gt, instance_of, optional


def _abs_path(_: object, attr: object, value: str | None) -> None:
    """Enforce absolute paths for optional string fields.

    Parameters
    ----------
    _ : object
        Unused instance reference from attrs validation protocol.
    attr : object
        Attribute metadata (may provide ``name``).
    value : str or None
        The value to validate; ``None`` and ``-`` are accepted.

    Raises
    ------
    ValueError
        If ``value`` is not an absolute path.
    """

    if value is None or value == "-":
        return
    if not os.path.isabs(value):
        name = getattr(attr, "name", "path")
        raise ValueError(f"{name} must be an absolute path")


def _pps_rate(value: object) -> float:
    if value is None:
        raise ValueError("pps must be given (packets per second > 0)")
    return float(value)  # type: ignore[arg-type]


def _opt_str(value: object) -> str | None:
    return None if value is None else str(value)


def _cpu_id(_: object, attr: object, value: str | None) -> None:
    if value is None or not value.strip():
        raise ValueError("cpu must be given (single CPU id, e.g. 3)")


@define(kw_only=True, frozen=True)
class PpsStatsRequest:
    """Inputs for one attribution run.

    Examples
    --------
    >>> PpsStatsRequest(pps=1_000_000, cpu="3")
    PpsStatsRequest(pps=1000000.0, cpu='3', ...)
    """

    pps: float = field(
        converter=_pps_rate,
        validator=[gt(0.0)],
        metadata={"help": "Measured packets (events) per second on the CPU"},
    )
    cpu: str = field(
        converter=_opt_str,
        validator=[_cpu_id],
        metadata={"help": "Single CPU the perf report is limited to"},
    )
    limit: float = field(
        default=0.10,
        converter=float,
        validator=[ge(0.0)],
        metadata={"help": "Stop the full report below this percent"},
    )
    debug: int = field(default=0, validator=[instance_of(int), ge(0)])
    dumper: bool = field(default=False, validator=[instance_of(bool)])
    report_file: str | None = field(default=None, validator=[optional(instance_of(str)), _abs_path])
    markdown: str | None = field(default=None, validator=[optional(instance_of(str)), _abs_path])

"""Contract/domain conversion utilities using `cattrs`.

Provides a shared converter for turning Hydra group configuration into
`GroupViewDefinition` records, the CLI request into a `MeasurementContext`,
and run state into plain data for the debug dump.
"""

from __future__ import annotations

from typing import Any, List

from cattrs import Converter
from omegaconf import DictConfig, ListConfig, OmegaConf

from perf_pps_stats.contracts.models import PpsStatsRequest
from perf_pps_stats.data.models import GroupViewDefinition, MeasurementContext
from perf_pps_stats.profiling.groups import VisitedRecord, compile_patterns

# Public converter instance; register hooks as needed.
converter = Converter()


def _structure_str_list(value: Any, _: Any) -> list[str]:
    """Accept a single string or a sequence of strings."""

    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


converter.register_structure_hook_func(lambda t: t in (List[str], list[str]), _structure_str_list)


def groups_from_config(raw: Any) -> list[GroupViewDefinition]:
    """Structure the ``groups`` config node into group definitions.

    Parameters
    ----------
    raw : ListConfig, DictConfig, list or dict
        Either a list of group mappings or a mapping with a ``views`` list.

    Returns
    -------
    list of GroupViewDefinition
        Groups in configured order; every pattern is compiled once here so an
        invalid regex fails before collection.

    Raises
    ------
    GroupPatternError
        If a pattern does not compile.
    ValueError
        If the node is not a list of mappings.
    """

    if isinstance(raw, (DictConfig, ListConfig)):
        raw = OmegaConf.to_container(raw, resolve=True)
    if isinstance(raw, dict):
        raw = raw.get("views", [])
    if not isinstance(raw, list):
        raise ValueError(f"groups must be a list of group mappings, got {type(raw).__name__}")
    groups = converter.structure(raw, list[GroupViewDefinition])
    for g in groups:
        compile_patterns(g.patterns)
    return groups


def context_from_request(req: PpsStatsRequest) -> MeasurementContext:
    return MeasurementContext(pps=req.pps, cpu=req.cpu, limit=req.limit)


def dump_state(ctx: MeasurementContext, visited: VisitedRecord) -> str:
    """Return the debug dump (visit counts, PPS, ns/event) as YAML."""

    payload = {
        "func_visited": visited.as_dict(),
        "context": converter.unstructure(ctx),
        "nanosec_per_event": ctx.nanosec_per_event,
    }
    return OmegaConf.to_yaml(payload)

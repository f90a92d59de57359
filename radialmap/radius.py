"""Node radius resolver.

Every node on an axis gets a final distance from the center:

* members of one positional ring fan out symmetrically around the ring's base
  radius (``spread_px`` either side),
* when the axis holds at least one node of the trigger ring, band ring members
  are spaced evenly between the inner-committed frontier and the outer edge,
* a lone member of the outermost ring is pulled back from the edge,
* a manual override replaces the computed radius.

The result always lies within ``[0, outer_radius - edge_margin_px]``.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from .config import EngineConfig, resolve_config
from .logging_utils import apply_debug_logging
from .model import Node, node_order_key
from .polar import ring_base_radius

logger = logging.getLogger(__name__)


def override_to_px(
    value: Optional[float], outer_radius: float, config: Optional[EngineConfig] = None
) -> Optional[float]:
    """Interpret a stored ``r_override``.

    Values up to ``override_fraction_limit`` are fractions of the outer radius,
    larger values are absolute pixels written by older documents. The threshold
    is a heuristic, not a format guarantee: a legacy pixel radius of 1.5 or less
    would be misread as a fraction.
    """
    if value is None:
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v):
        return None
    cfg = resolve_config(config)
    return v * outer_radius if v <= cfg.override_fraction_limit else v


def _group_by_ring(ordered: Sequence[Node]) -> Dict[str, List[Node]]:
    groups: Dict[str, List[Node]] = defaultdict(list)
    for node in ordered:
        groups[node.ring_id].append(node)
    return groups


def _spread_offset(idx: int, count: int, spread: float) -> float:
    if count <= 1:
        return 0.0
    return ((idx / (count - 1)) * 2.0 - 1.0) * spread


def _raw_radii(
    groups: Dict[str, List[Node]], outer_radius: float, cfg: EngineConfig
) -> Dict[int, float]:
    # Keyed by object identity so duplicate ids cannot collide.
    raw: Dict[int, float] = {}
    for ring_id, members in groups.items():
        base = ring_base_radius(ring_id, outer_radius, cfg)
        if base is None:
            base = outer_radius
        for idx, node in enumerate(members):
            raw[id(node)] = base + _spread_offset(idx, len(members), cfg.spread_px)
    return raw


def raw_axis_radii(
    axis_nodes: Sequence[Node], outer_radius: float, config: Optional[EngineConfig] = None
) -> List[Tuple[Node, float]]:
    """Ring base radius plus spread for each node, before band, inset and override rules."""
    cfg = resolve_config(config)
    ordered = sorted(axis_nodes, key=node_order_key)
    raw = _raw_radii(_group_by_ring(ordered), outer_radius, cfg)
    return [(node, raw[id(node)]) for node in ordered]


def has_trigger_node(axis_nodes: Sequence[Node], config: Optional[EngineConfig] = None) -> bool:
    cfg = resolve_config(config)
    return any(n.ring_id == cfg.uncommitted_ring_id for n in axis_nodes)


def inner_committed_frontier(
    axis_nodes: Sequence[Node], outer_radius: float, config: Optional[EngineConfig] = None
) -> float:
    """Largest raw radius among inner-committed members of the axis, 0 when there are none."""
    cfg = resolve_config(config)
    inner = cfg.inner_committed_ring_ids
    values = [r for node, r in raw_axis_radii(axis_nodes, outer_radius, cfg) if node.ring_id in inner]
    return max(values) if values else 0.0


def resolve_axis_radii(
    axis_nodes: Sequence[Node],
    outer_radius: float,
    config: Optional[EngineConfig] = None,
) -> Dict[str, float]:
    """Return ``{node_id: radius}`` for every node of a single axis."""

    cfg = resolve_config(config)
    ordered = sorted(axis_nodes, key=node_order_key)
    groups = _group_by_ring(ordered)
    raw = _raw_radii(groups, outer_radius, cfg)

    banded = cfg.uncommitted_ring_id in groups
    band_slots: Dict[int, float] = {}
    if banded:
        inner = cfg.inner_committed_ring_ids
        inner_values = [raw[id(n)] for n in ordered if n.ring_id in inner]
        frontier = max(inner_values) if inner_values else 0.0
        band = [n for n in ordered if cfg.is_band_ring(n.ring_id)]
        gap = (outer_radius - frontier) / (len(band) + 1)
        for i, node in enumerate(band):
            band_slots[id(node)] = frontier + (i + 1) * gap
        logger.debug(
            "Shared band active: frontier=%.2f occupants=%d gap=%.2f", frontier, len(band), gap
        )

    edge_limit = outer_radius - cfg.edge_margin_px
    outermost = cfg.outermost_ring_id
    single_outer = not banded and len(groups.get(outermost, ())) == 1
    single_limit = outer_radius - cfg.single_outer_inset_px

    radii: Dict[str, float] = {}
    for node in ordered:
        limit = single_limit if single_outer and node.ring_id == outermost else edge_limit
        r = band_slots.get(id(node), raw[id(node)])
        manual = override_to_px(node.r_override, outer_radius, cfg)
        if manual is not None:
            r = manual
        radii[node.id] = max(0.0, min(r, limit))
    return radii


def resolve_node_radius(
    node: Node,
    axis_nodes: Sequence[Node],
    outer_radius: float,
    config: Optional[EngineConfig] = None,
) -> float:
    members = list(axis_nodes)
    if not any(n is node for n in members):
        members.append(node)
    return resolve_axis_radii(members, outer_radius, config)[node.id]


apply_debug_logging(globals(), logger=logger)

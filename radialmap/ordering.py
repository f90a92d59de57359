"""Reordering helpers for axes and per-axis node sequences.

All helpers return new lists and leave their inputs untouched. Reordering
nodes always renumbers the affected axis densely as ``1..N``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .config import EngineConfig, resolve_config
from .model import Axis, Node, axis_nodes


def _apply_order(nodes: Sequence[Node], ordered: Sequence[Node]) -> List[Node]:
    new_seq: Dict[int, int] = {id(n): i + 1 for i, n in enumerate(ordered)}
    return [replace(n, sequence=new_seq[id(n)]) if id(n) in new_seq else n for n in nodes]


def renumber_axis(nodes: Sequence[Node], axis_id: str) -> List[Node]:
    return _apply_order(nodes, axis_nodes(nodes, axis_id))


def move_node_in_axis(nodes: Sequence[Node], axis_id: str, node_id: str, direction: int) -> List[Node]:
    """Swap ``node_id`` with its neighbour in axis order (``direction`` -1 or +1), then renumber."""
    ordered = axis_nodes(nodes, axis_id)
    idx = next((i for i, n in enumerate(ordered) if n.id == node_id), -1)
    target = idx + direction
    if idx == -1 or not 0 <= target < len(ordered):
        return list(nodes)
    ordered[idx], ordered[target] = ordered[target], ordered[idx]
    return _apply_order(nodes, ordered)


def next_sequence(nodes: Sequence[Node], axis_id: str) -> int:
    return max((n.sequence for n in nodes if n.axis_id == axis_id), default=0) + 1


def move_axis(axes: Sequence[Axis], axis_id: str, direction: int) -> List[Axis]:
    result = list(axes)
    idx = next((i for i, a in enumerate(result) if a.id == axis_id), -1)
    target = idx + direction
    if idx == -1 or not 0 <= target < len(result):
        return result
    result.insert(target, result.pop(idx))
    return result


def rotate_axes_left(axes: Sequence[Axis]) -> List[Axis]:
    result = list(axes)
    return result[1:] + result[:1] if len(result) > 1 else result


def rotate_axes_right(axes: Sequence[Axis]) -> List[Axis]:
    result = list(axes)
    return result[-1:] + result[:-1] if len(result) > 1 else result


def reset_nodes_to_uncommitted(nodes: Sequence[Node], config: Optional[EngineConfig] = None) -> List[Node]:
    """Move every node to the trigger ring and drop nudges and wrap widths."""
    cfg = resolve_config(config)
    return [
        replace(n, ring_id=cfg.uncommitted_ring_id, r_override=None, wrap_width=None) for n in nodes
    ]

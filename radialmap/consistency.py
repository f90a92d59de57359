from dataclasses import dataclass
from typing import List, Optional, Sequence

from .config import EngineConfig, resolve_config
from .model import Axis, Node, Ring, axis_nodes, ring_ranks


@dataclass
class SequenceWarning:
    axis_id: str
    node_id: str
    previous_node_id: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _ring_label(rings: Sequence[Ring], ring_id: str) -> str:
    for ring in rings:
        if ring.id == ring_id:
            return ring.label or ring.id
    return ring_id


def check_sequence_consistency(
    axes: Sequence[Axis],
    rings: Sequence[Ring],
    nodes: Sequence[Node],
    config: Optional[EngineConfig] = None,
) -> List[SequenceWarning]:
    """Flag nodes that come later in an axis's sequence but sit on an earlier ring."""
    cfg = resolve_config(config)
    ranks = ring_ranks(rings)
    warnings: List[SequenceWarning] = []

    for axis in axes:
        ordered = axis_nodes(nodes, axis.id)
        for prev, curr in zip(ordered, ordered[1:]):
            if cfg.uncommitted_ring_id in (prev.ring_id, curr.ring_id):
                continue
            if ranks.get(curr.ring_id, 0) >= ranks.get(prev.ring_id, 0):
                continue
            message = (
                f'[axis {axis.id}] Seq {curr.sequence} ("{curr.label}") is '
                f'{_ring_label(rings, curr.ring_id)} but comes after a '
                f'{_ring_label(rings, prev.ring_id)} item ("{prev.label}").'
            )
            warnings.append(
                SequenceWarning(
                    axis_id=axis.id,
                    node_id=curr.id,
                    previous_node_id=prev.id,
                    message=message,
                )
            )
    return warnings

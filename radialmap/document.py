"""Loading strategy-map documents for the command line."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .config import EngineConfig, resolve_config
from .model import DEFAULT_RINGS, Axis, Node, Ring, StrategyMap

logger = logging.getLogger(__name__)


class DocumentError(ValueError):
    pass


def _require_str(entry: Mapping[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise DocumentError(f"{where}: missing or non-string '{key}'")
    return value


def _optional_number(entry: Mapping[str, Any], key: str, where: str) -> Optional[float]:
    value = entry.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DocumentError(f"{where}: '{key}' must be a number or null")
    return float(value)


def _list_of_objects(state: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = state.get(key, [])
    if not isinstance(value, list):
        raise DocumentError(f"'{key}' must be a list")
    for idx, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise DocumentError(f"{key}[{idx}] must be an object")
    return value


def ensure_uncommitted_ring(rings: List[Ring], config: Optional[EngineConfig] = None) -> List[Ring]:
    """Append the trigger ring when a document predates it."""
    cfg = resolve_config(config)
    if any(r.id == cfg.uncommitted_ring_id for r in rings):
        return rings
    logger.info("Document has no '%s' ring; appending it", cfg.uncommitted_ring_id)
    return rings + [Ring(cfg.uncommitted_ring_id, "Uncommitted")]


def document_from_dict(data: Mapping[str, Any], config: Optional[EngineConfig] = None) -> StrategyMap:
    """Build a :class:`StrategyMap` from saved state (or an export wrapping it in ``state``)."""
    if not isinstance(data, dict):
        raise DocumentError("document must be a JSON object")
    state = data.get("state", data)
    if not isinstance(state, dict):
        raise DocumentError("'state' must be an object")

    axes = [
        Axis(
            id=_require_str(entry, "id", f"axes[{idx}]"),
            label=str(entry.get("label", "")),
            north_star=str(entry.get("northStar", "")),
        )
        for idx, entry in enumerate(_list_of_objects(state, "axes"))
    ]

    if "rings" in state:
        rings = [
            Ring(id=_require_str(entry, "id", f"rings[{idx}]"), label=str(entry.get("label", "")))
            for idx, entry in enumerate(_list_of_objects(state, "rings"))
        ]
    else:
        rings = list(DEFAULT_RINGS)

    nodes: List[Node] = []
    for idx, entry in enumerate(_list_of_objects(state, "nodes")):
        where = f"nodes[{idx}]"
        sequence = entry.get("sequence", 1)
        if isinstance(sequence, bool) or not isinstance(sequence, (int, float)):
            raise DocumentError(f"{where}: 'sequence' must be a number")
        nodes.append(
            Node(
                id=_require_str(entry, "id", where),
                label=str(entry.get("label", "")),
                axis_id=_require_str(entry, "axisId", where),
                ring_id=_require_str(entry, "ringId", where),
                sequence=int(sequence),
                wrap_width=_optional_number(entry, "wrapWidth", where),
                r_override=_optional_number(entry, "rOverride", where),
            )
        )

    title = state.get("title")
    subtitle = state.get("subtitle")
    return StrategyMap(
        title=title if isinstance(title, str) else "Untitled Strategy",
        subtitle=subtitle if isinstance(subtitle, str) else "",
        axes=axes,
        rings=ensure_uncommitted_ring(rings, config),
        nodes=nodes,
    )


def load_document(path: Union[str, Path], config: Optional[EngineConfig] = None) -> StrategyMap:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path}: invalid JSON ({exc})") from exc
    return document_from_dict(data, config)

"""Contour ("blob") builder.

For each cumulative horizon rank the contour passes, on every axis, through
the furthest resolved node whose ring rank is at most that rank. Axes without
an eligible node pull their vertex to the center. The radius arrays become
smooth closed SVG paths through a Catmull-Rom to cubic Bézier conversion.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .config import EngineConfig, resolve_config
from .logging_utils import apply_debug_logging
from .model import Axis, Node, Ring, axis_nodes, ring_ranks
from .polar import axis_angles
from .radius import resolve_axis_radii

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

# Paint outside-in so inner contours cover outer ones.
CONTOUR_PAINT_ORDER: Tuple[int, ...] = (2, 1, 0)

_PATH_TOKEN_RE = re.compile(r"[MLCZ]|[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _rank_lookup(rings: Sequence[Ring], cfg: EngineConfig) -> Tuple[Dict[str, int], int]:
    ranks = ring_ranks(rings)
    outermost = cfg.outermost_ring_id
    fallback = ranks.get(outermost, len(cfg.positional_ring_ids) - 1) if outermost else 0
    return ranks, fallback


def contour_radii(
    axes: Sequence[Axis],
    rings: Sequence[Ring],
    nodes: Sequence[Node],
    outer_radius: float,
    rank: int,
    config: Optional[EngineConfig] = None,
) -> np.ndarray:
    """One radius per axis: the furthest node with ring rank ``<= rank``, else 0."""
    cfg = resolve_config(config)
    ranks, fallback = _rank_lookup(rings, cfg)
    out = np.zeros(len(axes), dtype=float)
    for idx, axis in enumerate(axes):
        members = axis_nodes(nodes, axis.id)
        eligible = [
            n
            for n in members
            if n.ring_id != cfg.uncommitted_ring_id and ranks.get(n.ring_id, fallback) <= rank
        ]
        if not eligible:
            continue
        resolved = resolve_axis_radii(members, outer_radius, cfg)
        out[idx] = max(resolved[n.id] for n in eligible)
    return out


def build_contour_targets(
    axes: Sequence[Axis],
    rings: Sequence[Ring],
    nodes: Sequence[Node],
    outer_radius: float,
    config: Optional[EngineConfig] = None,
) -> np.ndarray:
    """Stack the cumulative contours for every positional rank, shape ``(ranks, axes)``."""
    cfg = resolve_config(config)
    count = len(cfg.positional_ring_ids)
    targets = np.zeros((count, len(axes)), dtype=float)
    for rank in range(count):
        targets[rank] = contour_radii(axes, rings, nodes, outer_radius, rank, cfg)
    logger.debug("Contour targets for %d axes: %s", len(axes), targets.tolist())
    return targets


def radii_to_points(radii: Sequence[float], center: Point) -> List[Point]:
    values = np.asarray(radii, dtype=float)
    angles = axis_angles(len(values))
    cx, cy = center
    xs = cx + values * np.cos(angles)
    ys = cy + values * np.sin(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def _fmt(value: float) -> str:
    # repr() is the shortest text that parses back to the same float.
    return repr(float(value))


def _pt(point: Point) -> str:
    return f"{_fmt(point[0])} {_fmt(point[1])}"


def smooth_closed_path(points: Sequence[Point], tension: float = 1.0) -> str:
    """Closed Catmull-Rom spline through ``points`` as SVG cubic segments."""

    n = len(points)
    if n == 0:
        return ""
    if n < 3:
        parts = [f"M {_pt(points[0])}"]
        parts.extend(f"L {_pt(p)}" for p in points[1:])
        parts.append("Z")
        return " ".join(parts)

    parts = [f"M {_pt(points[0])}"]
    for i in range(n):
        p0 = points[(i - 1) % n]
        p1 = points[i]
        p2 = points[(i + 1) % n]
        p3 = points[(i + 2) % n]
        cp1 = (p1[0] + (p2[0] - p0[0]) / 6.0 * tension, p1[1] + (p2[1] - p0[1]) / 6.0 * tension)
        cp2 = (p2[0] - (p3[0] - p1[0]) / 6.0 * tension, p2[1] - (p3[1] - p1[1]) / 6.0 * tension)
        parts.append(f"C {_pt(cp1)}, {_pt(cp2)}, {_pt(p2)}")
    parts.append("Z")
    return " ".join(parts)


def parse_path_anchors(path: str) -> List[Point]:
    """Vertices a path passes through: the ``M`` point, ``L`` points and ``C`` endpoints."""
    tokens = _PATH_TOKEN_RE.findall(path)
    anchors: List[Point] = []
    i = 0
    while i < len(tokens):
        cmd = tokens[i]
        if cmd in ("M", "L"):
            anchors.append((float(tokens[i + 1]), float(tokens[i + 2])))
            i += 3
        elif cmd == "C":
            anchors.append((float(tokens[i + 5]), float(tokens[i + 6])))
            i += 7
        elif cmd == "Z":
            i += 1
        else:
            raise ValueError(f"unexpected path token {cmd!r} at position {i}")
    return anchors


def radii_to_path(radii: Sequence[float], center: Point, tension: float = 1.0) -> str:
    return smooth_closed_path(radii_to_points(radii, center), tension)


apply_debug_logging(globals(), logger=logger)

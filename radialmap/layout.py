"""Screen placement of axes, nodes, labels and contours for one render."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .config import EngineConfig, resolve_config
from .contour import CONTOUR_PAINT_ORDER, build_contour_targets, radii_to_path
from .model import Axis, Node, Ring, Viewport, axis_nodes
from .polar import axis_angle, polar_to_cartesian, ring_base_radius
from .radius import resolve_axis_radii

Point = Tuple[float, float]


@dataclass
class AxisPlacement:
    axis_id: str
    label: str
    angle: float
    end: Point
    label_pos: Point
    text_anchor: str  # "start" right of center, "end" left of it


@dataclass
class NodePlacement:
    node_id: str
    axis_id: str
    ring_id: str
    radius: float
    angle: float
    x: float
    y: float
    label_lines: List[str] = field(default_factory=list)
    label_pos: Point = (0.0, 0.0)
    dragging: bool = False


@dataclass
class ContourPath:
    rank: int
    ring_id: str
    radii: List[float]
    path: str


@dataclass
class SceneLayout:
    center: Point
    outer_radius: float
    ring_radii: Dict[str, float]
    axes: List[AxisPlacement]
    nodes: List[NodePlacement]
    contours: List[ContourPath]

    def node(self, node_id: str) -> Optional[NodePlacement]:
        for placement in self.nodes:
            if placement.node_id == node_id:
                return placement
        return None


def clamp_wrap_width(width: Optional[float], config: Optional[EngineConfig] = None) -> Optional[float]:
    if not width:
        return None
    cfg = resolve_config(config)
    return max(cfg.min_wrap_width, min(cfg.max_wrap_width, float(width)))


def wrap_label(
    label: str, wrap_width: Optional[float] = None, config: Optional[EngineConfig] = None
) -> List[str]:
    """Greedy word wrap at an approximate character budget for ``wrap_width`` pixels.

    Words longer than a line are hard-broken.
    """
    cfg = resolve_config(config)
    text = str(label or "").strip()
    if not text:
        return [""]
    max_chars = max(cfg.min_wrap_chars, int((wrap_width or cfg.default_wrap_width) // cfg.approx_char_px))

    lines: List[str] = []
    cur = ""
    for word in text.split():
        if len(word) > max_chars:
            if cur:
                lines.append(cur)
                cur = ""
            lines.extend(word[i:i + max_chars] for i in range(0, len(word), max_chars))
            continue
        candidate = f"{cur} {word}" if cur else word
        if len(candidate) <= max_chars:
            cur = candidate
        else:
            lines.append(cur)
            cur = word
    if cur:
        lines.append(cur)
    return lines or [text]


def layout_axes(
    axes: Sequence[Axis], viewport: Viewport, config: Optional[EngineConfig] = None
) -> List[AxisPlacement]:
    cfg = resolve_config(config)
    center = viewport.center
    outer = viewport.outer_radius
    placements: List[AxisPlacement] = []
    for idx, axis in enumerate(axes):
        angle = axis_angle(idx, len(axes))
        end = polar_to_cartesian(center, outer, angle)
        lx, ly = polar_to_cartesian(center, outer + cfg.axis_label_offset_px, angle)
        is_right = lx >= center[0]
        nudge = cfg.axis_label_nudge_px if is_right else -cfg.axis_label_nudge_px
        placements.append(
            AxisPlacement(
                axis_id=axis.id,
                label=axis.label,
                angle=angle,
                end=end,
                label_pos=(lx + nudge, ly),
                text_anchor="start" if is_right else "end",
            )
        )
    return placements


def layout_nodes(
    axes: Sequence[Axis],
    nodes: Sequence[Node],
    viewport: Viewport,
    *,
    drag: Optional[Tuple[str, Point]] = None,
    config: Optional[EngineConfig] = None,
) -> List[NodePlacement]:
    """Place every node that sits on a live axis.

    ``drag`` is ``(node_id, point)`` while a node is being dragged; that node is
    drawn at the pointer instead of its resolved position.
    """
    cfg = resolve_config(config)
    center = viewport.center
    outer = viewport.outer_radius
    placements: List[NodePlacement] = []
    for idx, axis in enumerate(axes):
        angle = axis_angle(idx, len(axes))
        members = axis_nodes(nodes, axis.id)
        radii = resolve_axis_radii(members, outer, cfg)
        for node in members:
            r = radii[node.id]
            x, y = polar_to_cartesian(center, r, angle)
            dragging = drag is not None and drag[0] == node.id
            if dragging:
                x, y = drag[1]
            wrap = clamp_wrap_width(node.wrap_width, cfg)
            lines = wrap_label(node.label, wrap, cfg) if wrap else [node.label]
            label_y = y - (len(lines) - 1) * cfg.label_line_height / 2.0
            placements.append(
                NodePlacement(
                    node_id=node.id,
                    axis_id=axis.id,
                    ring_id=node.ring_id,
                    radius=r,
                    angle=angle,
                    x=x,
                    y=y,
                    label_lines=lines,
                    label_pos=(x + cfg.label_offset_px, label_y),
                    dragging=dragging,
                )
            )
    return placements


def layout_contours(
    radii: np.ndarray, viewport: Viewport, config: Optional[EngineConfig] = None
) -> List[ContourPath]:
    cfg = resolve_config(config)
    ring_ids = cfg.positional_ring_ids
    contours: List[ContourPath] = []
    for rank in CONTOUR_PAINT_ORDER:
        if rank >= len(radii):
            continue
        row = [float(v) for v in radii[rank]]
        contours.append(
            ContourPath(
                rank=rank,
                ring_id=ring_ids[rank] if rank < len(ring_ids) else "",
                radii=row,
                path=radii_to_path(row, viewport.center, cfg.contour_tension),
            )
        )
    return contours


def layout_scene(
    axes: Sequence[Axis],
    rings: Sequence[Ring],
    nodes: Sequence[Node],
    viewport: Viewport,
    *,
    contour_radii: Optional[np.ndarray] = None,
    drag: Optional[Tuple[str, Point]] = None,
    config: Optional[EngineConfig] = None,
) -> SceneLayout:
    """Everything the renderer draws, as a pure function of its inputs.

    ``contour_radii`` are the animator's current arrays; when omitted the
    contours are drawn at their targets.
    """
    cfg = resolve_config(config)
    outer = viewport.outer_radius
    if contour_radii is None:
        contour_radii = build_contour_targets(axes, rings, nodes, outer, cfg)
    ring_radii = {
        rid: ring_base_radius(rid, outer, cfg) or outer for rid in cfg.positional_ring_ids
    }
    return SceneLayout(
        center=viewport.center,
        outer_radius=outer,
        ring_radii=ring_radii,
        axes=layout_axes(axes, viewport, cfg),
        nodes=layout_nodes(axes, nodes, viewport, drag=drag, config=cfg),
        contours=layout_contours(np.asarray(contour_radii, dtype=float), viewport, cfg),
    )


def screen_to_drawing(client: Point, rect: Tuple[float, float, float, float], viewport: Viewport) -> Point:
    """Map a client point inside the element ``rect`` (left, top, width, height) to drawing units."""
    left, top, width, height = rect
    w, h = viewport.size
    if width <= 0 or height <= 0 or not all(map(math.isfinite, client)):
        return viewport.center
    return ((client[0] - left) / width * w, (client[1] - top) / height * h)

"""Drag/snap resolver: pointer trajectories back into axis/ring/sequence edits.

Per active pointer the resolver walks ``IDLE -> PRESSED -> (DRAGGING | click)
-> IDLE``. Moves shorter than the drag threshold are ignored so a click never
turns into a drop. A drop snaps to the angularly nearest axis and to the
nearest positional ring, unless it lands in the outer half of the space beyond
the axis's committed frontier, which means "uncommitted".

Double activation (two presses on one node within ``double_activation_ms``)
is tracked separately and opens inline label editing instead of a drag.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .config import EngineConfig, resolve_config
from .layout import layout_nodes
from .logging_utils import apply_debug_logging
from .model import Axis, Node, Ring, Viewport, axis_nodes
from .polar import axis_angle, circular_angle_diff, normalize_angle, ring_base_radius
from .radius import has_trigger_node, raw_axis_radii

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
NodesCallback = Callable[[List[Node]], None]


# ---------------------------------------------------------------------------
# Pure snapping helpers
# ---------------------------------------------------------------------------


def clamp_to_disc(point: Point, center: Point, max_radius: float) -> Point:
    dx = point[0] - center[0]
    dy = point[1] - center[1]
    r = math.hypot(dx, dy)
    if r <= max_radius or r == 0:
        return point
    k = max_radius / r
    return (center[0] + dx * k, center[1] + dy * k)


def snap_axis(point: Point, center: Point, axes: Sequence[Axis]) -> Optional[str]:
    """Axis whose angle is circularly closest to the direction of ``point``."""
    if not axes:
        return None
    drop_angle = normalize_angle(math.atan2(point[1] - center[1], point[0] - center[0]))
    best_id = axes[0].id
    best = math.inf
    for idx, axis in enumerate(axes):
        d = circular_angle_diff(drop_angle, normalize_angle(axis_angle(idx, len(axes))))
        if d < best:
            best = d
            best_id = axis.id
    return best_id


def snap_frontier(
    axis_members: Sequence[Node], outer_radius: float, config: Optional[EngineConfig] = None
) -> float:
    """Committed frontier of the target axis used for the uncommitted threshold.

    With a trigger-ring node on the axis only inner-committed rings count (the
    band starts after them); otherwise every ring but the trigger ring counts,
    unknown rings at the outer radius.
    """
    cfg = resolve_config(config)
    raw = raw_axis_radii(axis_members, outer_radius, cfg)
    if has_trigger_node(axis_members, cfg):
        inner = set(cfg.inner_committed_ring_ids)
        values = [r for node, r in raw if node.ring_id in inner]
    else:
        values = [r for node, r in raw if node.ring_id != cfg.uncommitted_ring_id]
    return max(values) if values else 0.0


def uncommitted_threshold(frontier: float, outer_radius: float) -> float:
    if frontier == 0:
        return outer_radius / 2.0
    return (frontier + outer_radius) / 2.0


def ring_for_drop(
    drop_radius: float,
    frontier: float,
    outer_radius: float,
    config: Optional[EngineConfig] = None,
) -> str:
    cfg = resolve_config(config)
    if drop_radius >= uncommitted_threshold(frontier, outer_radius):
        return cfg.uncommitted_ring_id
    best_id = cfg.uncommitted_ring_id
    best = math.inf
    for ring_id in cfg.positional_ring_ids:
        base = ring_base_radius(ring_id, outer_radius, cfg)
        d = abs(drop_radius - base)
        if d < best:
            best = d
            best_id = ring_id
    return best_id


def snap_ring(
    axis_members: Sequence[Node],
    drop_radius: float,
    outer_radius: float,
    config: Optional[EngineConfig] = None,
) -> str:
    frontier = snap_frontier(axis_members, outer_radius, config)
    return ring_for_drop(drop_radius, frontier, outer_radius, config)


def apply_drop(
    nodes: Sequence[Node],
    node_id: str,
    axis_id: str,
    ring_id: str,
    drop_radius: float,
    outer_radius: float,
) -> Tuple[List[Node], bool]:
    """Commit a drop; return the new node list and whether axis or ring changed.

    A changed assignment clears the manual override and appends the node after
    the last sequence of its new axis and ring. An unchanged one keeps the
    sequence and stores the drop radius as a fraction of the outer radius.
    """
    moving = next((n for n in nodes if n.id == node_id), None)
    if moving is None:
        return list(nodes), False

    changed = moving.axis_id != axis_id or moving.ring_id != ring_id
    if changed:
        peers = [n.sequence for n in nodes if n.axis_id == axis_id and n.ring_id == ring_id]
        moved = replace(
            moving,
            axis_id=axis_id,
            ring_id=ring_id,
            sequence=max(peers, default=0) + 1,
            r_override=None,
        )
    else:
        moved = replace(moving, r_override=drop_radius / outer_radius)
    return [moved if n.id == node_id else n for n in nodes], changed


# ---------------------------------------------------------------------------
# Interaction state machines
# ---------------------------------------------------------------------------


class DragPhase(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


class ReleaseKind(Enum):
    IGNORED = "ignored"
    CLICK = "click"
    DROP = "drop"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerSample:
    """Pointer position in drawing coordinates."""

    pointer_id: int
    x: float
    y: float
    t_ms: float = 0.0

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass
class MapFrame:
    """Read-only view of the document supplied with every pointer event."""

    axes: Sequence[Axis]
    rings: Sequence[Ring]
    nodes: Sequence[Node]
    viewport: Viewport = field(default_factory=Viewport)


@dataclass
class InlineEditRequest:
    node_id: str
    label: str
    anchor: Point


@dataclass
class PressOutcome:
    node_id: str
    inline_edit: Optional[InlineEditRequest] = None
    selected_node_id: Optional[str] = None
    expand_axis_id: Optional[str] = None
    capture_pointer: Optional[int] = None
    release_pointer: Optional[int] = None


@dataclass
class ReleaseOutcome:
    kind: ReleaseKind
    node_id: Optional[str] = None
    axis_id: Optional[str] = None
    ring_id: Optional[str] = None
    assignment_changed: bool = False
    drop_radius: Optional[float] = None
    selected_node_id: Optional[str] = None
    expand_axis_id: Optional[str] = None
    scroll_into_view: bool = False
    release_pointer: Optional[int] = None


class DoubleActivationDetector:
    """Recognises a second press on the same node within a fixed window.

    A recognised double activation clears the record, so a third quick press
    starts a new pair.
    """

    def __init__(self, window_ms: Optional[float] = None) -> None:
        self.window_ms = float(
            window_ms if window_ms is not None else resolve_config(None).double_activation_ms
        )
        self._last: Optional[Tuple[str, float]] = None

    def register(self, node_id: str, t_ms: float) -> bool:
        last = self._last
        if last is not None and last[0] == node_id and t_ms - last[1] < self.window_ms:
            self._last = None
            return True
        self._last = (node_id, t_ms)
        return False

    def reset(self) -> None:
        self._last = None


@dataclass
class _ActivePointer:
    pointer_id: int
    node_id: str
    start: Point
    position: Point
    dragged: bool = False


def _node_anchor(frame: MapFrame, node_id: str, config: EngineConfig) -> Point:
    for placement in layout_nodes(frame.axes, frame.nodes, frame.viewport, config=config):
        if placement.node_id == node_id:
            return (placement.x, placement.y)
    return frame.viewport.center


class DragSnapResolver:
    """Pointer handlers for the interactive surface.

    ``replace_nodes`` receives the full new node list whenever a drop changes
    the model; ``on_inline_edit`` receives an :class:`InlineEditRequest` on a
    double activation.
    """

    def __init__(
        self,
        replace_nodes: NodesCallback,
        *,
        on_inline_edit: Optional[Callable[[InlineEditRequest], None]] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self._replace_nodes = replace_nodes
        self._on_inline_edit = on_inline_edit
        self._config = config
        self._active: Optional[_ActivePointer] = None
        self.selected_node_id: Optional[str] = None
        self.double_activation = DoubleActivationDetector(self.config.double_activation_ms)

    @property
    def config(self) -> EngineConfig:
        return resolve_config(self._config)

    @property
    def phase(self) -> DragPhase:
        if self._active is None:
            return DragPhase.IDLE
        return DragPhase.DRAGGING if self._active.dragged else DragPhase.PRESSED

    @property
    def drag_position(self) -> Optional[Tuple[str, Point]]:
        """``(node_id, point)`` for the node following the pointer, if any."""
        active = self._active
        if active is None or not active.dragged:
            return None
        return active.node_id, active.position

    def pointer_down(self, frame: MapFrame, node_id: str, sample: PointerSample) -> PressOutcome:
        cfg = self.config
        anchor = _node_anchor(frame, node_id, cfg)

        if self.double_activation.register(node_id, sample.t_ms):
            released = self._active.pointer_id if self._active is not None else None
            self._active = None
            label = next((n.label for n in frame.nodes if n.id == node_id), "")
            request = InlineEditRequest(node_id=node_id, label=label, anchor=anchor)
            logger.info("Double activation on node %s; opening inline edit", node_id)
            if self._on_inline_edit is not None:
                self._on_inline_edit(request)
            return PressOutcome(
                node_id=node_id,
                inline_edit=request,
                selected_node_id=self.selected_node_id,
                release_pointer=released,
            )

        displaced = None
        if self._active is not None and self._active.pointer_id != sample.pointer_id:
            displaced = self._active.pointer_id
        self.selected_node_id = None if self.selected_node_id == node_id else node_id
        expand = None
        if self.selected_node_id is not None:
            expand = next((n.axis_id for n in frame.nodes if n.id == node_id), None)
        self._active = _ActivePointer(
            pointer_id=sample.pointer_id,
            node_id=node_id,
            start=sample.point,
            position=anchor,
        )
        return PressOutcome(
            node_id=node_id,
            selected_node_id=self.selected_node_id,
            expand_axis_id=expand,
            capture_pointer=sample.pointer_id,
            release_pointer=displaced,
        )

    def pointer_move(self, frame: MapFrame, sample: PointerSample) -> Optional[Point]:
        """Track the pointer; return the clamped drag position once dragging."""
        active = self._active
        if active is None or sample.pointer_id != active.pointer_id:
            return None
        cfg = self.config
        if not active.dragged:
            moved = math.hypot(sample.x - active.start[0], sample.y - active.start[1])
            if moved < cfg.drag_threshold_px:
                return None
            active.dragged = True
            logger.debug("Node %s crossed the drag threshold", active.node_id)
        vp = frame.viewport
        active.position = clamp_to_disc(sample.point, vp.center, vp.outer_radius - cfg.edge_margin_px)
        return active.position

    def pointer_up(self, frame: MapFrame, sample: PointerSample) -> ReleaseOutcome:
        active = self._active
        if active is None or sample.pointer_id != active.pointer_id:
            return ReleaseOutcome(kind=ReleaseKind.IGNORED)
        self._active = None

        # Only move events start a drag; the drop lands at the last drag position.
        if not active.dragged or not frame.axes:
            return self._click(frame, active)
        return self._drop(frame, active)

    def pointer_cancel(self, sample: PointerSample) -> ReleaseOutcome:
        active = self._active
        if active is None or sample.pointer_id != active.pointer_id:
            return ReleaseOutcome(kind=ReleaseKind.IGNORED)
        self._active = None
        return ReleaseOutcome(
            kind=ReleaseKind.CANCEL,
            node_id=active.node_id,
            selected_node_id=self.selected_node_id,
            release_pointer=active.pointer_id,
        )

    def reset(self) -> None:
        self._active = None
        self.double_activation.reset()

    def _click(self, frame: MapFrame, active: _ActivePointer) -> ReleaseOutcome:
        node = next((n for n in frame.nodes if n.id == active.node_id), None)
        still_selected = node is not None and self.selected_node_id == node.id
        return ReleaseOutcome(
            kind=ReleaseKind.CLICK,
            node_id=active.node_id,
            selected_node_id=self.selected_node_id,
            expand_axis_id=node.axis_id if still_selected else None,
            scroll_into_view=still_selected,
            release_pointer=active.pointer_id,
        )

    def _drop(self, frame: MapFrame, active: _ActivePointer) -> ReleaseOutcome:
        cfg = self.config
        vp = frame.viewport
        outer = vp.outer_radius
        center = vp.center
        drop_point = active.position
        drop_radius = min(
            math.hypot(drop_point[0] - center[0], drop_point[1] - center[1]),
            outer - cfg.edge_margin_px,
        )
        if not any(n.id == active.node_id for n in frame.nodes):
            return ReleaseOutcome(kind=ReleaseKind.IGNORED, release_pointer=active.pointer_id)

        axis_id = snap_axis(drop_point, center, frame.axes)
        ring_id = snap_ring(axis_nodes(frame.nodes, axis_id), drop_radius, outer, cfg)

        new_nodes, changed = apply_drop(
            frame.nodes, active.node_id, axis_id, ring_id, drop_radius, outer
        )
        logger.info(
            "Dropped node %s on axis=%s ring=%s radius=%.1f (assignment %s)",
            active.node_id,
            axis_id,
            ring_id,
            drop_radius,
            "changed" if changed else "kept",
        )
        self._replace_nodes(new_nodes)
        self.selected_node_id = active.node_id
        return ReleaseOutcome(
            kind=ReleaseKind.DROP,
            node_id=active.node_id,
            axis_id=axis_id,
            ring_id=ring_id,
            assignment_changed=changed,
            drop_radius=drop_radius,
            selected_node_id=active.node_id,
            expand_axis_id=axis_id,
            scroll_into_view=False,
            release_pointer=active.pointer_id,
        )


class InlineLabelEditor:
    """Text-edit overlay state opened by a double activation.

    ``Enter`` and losing focus commit, ``Escape`` discards. A blank value
    leaves the label untouched.
    """

    CONFIRM_KEYS = ("Enter",)
    CANCEL_KEYS = ("Escape",)

    def __init__(self, replace_nodes: NodesCallback) -> None:
        self._replace_nodes = replace_nodes
        self.request: Optional[InlineEditRequest] = None
        self.value = ""

    @property
    def is_open(self) -> bool:
        return self.request is not None

    def start(self, request: InlineEditRequest) -> None:
        self.request = request
        self.value = request.label

    def update(self, text: str) -> None:
        self.value = text

    def handle_key(self, key: str, nodes: Sequence[Node]) -> bool:
        """Return ``True`` when the key closed the editor."""
        if not self.is_open:
            return False
        if key in self.CONFIRM_KEYS:
            self.commit(nodes)
            return True
        if key in self.CANCEL_KEYS:
            self.cancel()
            return True
        return False

    def blur(self, nodes: Sequence[Node]) -> None:
        if self.is_open:
            self.commit(nodes)

    def commit(self, nodes: Sequence[Node]) -> None:
        request = self.request
        if request is None:
            return
        text = self.value.strip()
        if text:
            self._replace_nodes(
                [replace(n, label=text) if n.id == request.node_id else n for n in nodes]
            )
        self.cancel()

    def cancel(self) -> None:
        self.request = None
        self.value = ""


apply_debug_logging(globals(), logger=logger)

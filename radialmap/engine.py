"""Engine façade wiring layout, contour animation and pointer handling together."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import numpy as np

from .animator import ContourAnimator, FrameScheduler
from .config import EngineConfig, resolve_config
from .contour import build_contour_targets
from .layout import SceneLayout, layout_scene
from .model import Node, Point
from .snap import (
    DragSnapResolver,
    InlineEditRequest,
    MapFrame,
    PointerSample,
    PressOutcome,
    ReleaseOutcome,
)

logger = logging.getLogger(__name__)


class RadialMapEngine:
    """Pure layout of the latest frame plus the two pieces of owned state.

    The animator's on-screen contour arrays and the resolver's active pointer
    are the only mutable state; everything else is derived from the
    :class:`MapFrame` passed to :meth:`render`.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        replace_nodes: Callable[[List[Node]], None],
        *,
        on_inline_edit: Optional[Callable[[InlineEditRequest], None]] = None,
        on_frame: Optional[Callable[[np.ndarray], None]] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self._scheduler = scheduler
        self._on_frame = on_frame
        self._config = config
        self._frame = MapFrame(axes=[], rings=[], nodes=[])
        self._animator: Optional[ContourAnimator] = None
        self.resolver = DragSnapResolver(
            replace_nodes, on_inline_edit=on_inline_edit, config=config
        )

    @property
    def config(self) -> EngineConfig:
        return resolve_config(self._config)

    @property
    def frame(self) -> MapFrame:
        return self._frame

    @property
    def animating(self) -> bool:
        return self._animator is not None and self._animator.is_running

    def render(self, frame: MapFrame) -> SceneLayout:
        """Lay out ``frame``, starting a contour transition when its targets moved."""
        cfg = self.config
        self._frame = frame
        outer = frame.viewport.outer_radius
        targets = build_contour_targets(frame.axes, frame.rings, frame.nodes, outer, cfg)
        if self._animator is None:
            self._animator = ContourAnimator(
                targets, self._scheduler, duration_ms=cfg.transition_ms, on_frame=self._on_frame
            )
        elif targets.shape != self._animator.target.shape or not np.array_equal(
            targets, self._animator.target
        ):
            logger.debug("Contour targets changed; restarting transition")
            self._animator.retarget(targets)
        return layout_scene(
            frame.axes,
            frame.rings,
            frame.nodes,
            frame.viewport,
            contour_radii=self._animator.current,
            drag=self.resolver.drag_position,
            config=cfg,
        )

    def on_pointer_down(self, node_id: str, sample: PointerSample) -> PressOutcome:
        return self.resolver.pointer_down(self._frame, node_id, sample)

    def on_pointer_move(self, sample: PointerSample) -> Optional[Point]:
        return self.resolver.pointer_move(self._frame, sample)

    def on_pointer_up(self, sample: PointerSample) -> ReleaseOutcome:
        return self.resolver.pointer_up(self._frame, sample)

    def on_pointer_cancel(self, sample: PointerSample) -> ReleaseOutcome:
        return self.resolver.pointer_cancel(sample)

    def close(self) -> None:
        """Tear down: cancel any scheduled frame and forget the active pointer."""
        if self._animator is not None:
            self._animator.close()
        self.resolver.reset()

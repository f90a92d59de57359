from .model import (
    Axis,
    Ring,
    Node,
    Viewport,
    StrategyMap,
    DEFAULT_RINGS,
    axis_nodes,
    node_order_key,
    ring_ranks,
)
from .config import EngineConfig, get_engine_config, set_engine_config
from .polar import axis_angle, axis_angles, ring_base_radius, polar_to_cartesian
from .radius import (
    override_to_px,
    resolve_axis_radii,
    resolve_node_radius,
    inner_committed_frontier,
)
from .contour import (
    contour_radii,
    build_contour_targets,
    smooth_closed_path,
    radii_to_path,
    parse_path_anchors,
)
from .animator import ContourAnimator, FrameScheduler, ManualFrameScheduler, ease_in_out_cubic
from .snap import (
    DragSnapResolver,
    DragPhase,
    ReleaseKind,
    PointerSample,
    MapFrame,
    PressOutcome,
    ReleaseOutcome,
    InlineEditRequest,
    InlineLabelEditor,
    DoubleActivationDetector,
    snap_axis,
    snap_ring,
    snap_frontier,
    apply_drop,
)
from .layout import SceneLayout, layout_scene, wrap_label, screen_to_drawing
from .consistency import check_sequence_consistency, SequenceWarning
from .ordering import (
    renumber_axis,
    move_node_in_axis,
    next_sequence,
    move_axis,
    rotate_axes_left,
    rotate_axes_right,
    reset_nodes_to_uncommitted,
)
from .engine import RadialMapEngine
from .svg import generate_svg_document
from .document import DocumentError, document_from_dict, load_document, ensure_uncommitted_ring

__all__ = [
    'Axis',
    'Ring',
    'Node',
    'Viewport',
    'StrategyMap',
    'DEFAULT_RINGS',
    'axis_nodes',
    'node_order_key',
    'ring_ranks',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
    'axis_angle',
    'axis_angles',
    'ring_base_radius',
    'polar_to_cartesian',
    'override_to_px',
    'resolve_axis_radii',
    'resolve_node_radius',
    'inner_committed_frontier',
    'contour_radii',
    'build_contour_targets',
    'smooth_closed_path',
    'radii_to_path',
    'parse_path_anchors',
    'ContourAnimator',
    'FrameScheduler',
    'ManualFrameScheduler',
    'ease_in_out_cubic',
    'DragSnapResolver',
    'DragPhase',
    'ReleaseKind',
    'PointerSample',
    'MapFrame',
    'PressOutcome',
    'ReleaseOutcome',
    'InlineEditRequest',
    'InlineLabelEditor',
    'DoubleActivationDetector',
    'snap_axis',
    'snap_ring',
    'snap_frontier',
    'apply_drop',
    'SceneLayout',
    'layout_scene',
    'wrap_label',
    'screen_to_drawing',
    'check_sequence_consistency',
    'SequenceWarning',
    'renumber_axis',
    'move_node_in_axis',
    'next_sequence',
    'move_axis',
    'rotate_axes_left',
    'rotate_axes_right',
    'reset_nodes_to_uncommitted',
    'RadialMapEngine',
    'generate_svg_document',
    'DocumentError',
    'document_from_dict',
    'load_document',
    'ensure_uncommitted_ring',
]

"""Configuration for the geometry and interaction engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass
class EngineConfig:
    """Tunable constants shared by the layout, contour and drag components.

    ``ring_fractions`` names the positional rings and their base radius as a
    fraction of the outer radius. ``band_ring_ids`` is the shared outer band
    policy: on an axis holding at least one ``uncommitted_ring_id`` node, every
    member of a band ring is spaced evenly between the inner-committed frontier
    and the outer edge.
    """

    ring_fractions: Dict[str, float] = field(
        default_factory=lambda: {"now": 0.4, "next": 0.7, "later": 1.0}
    )
    uncommitted_ring_id: str = "uncommitted"
    band_ring_ids: Tuple[str, ...] = ("later", "uncommitted")

    spread_px: float = 18.0
    edge_margin_px: float = 10.0
    single_outer_inset_px: float = 14.0
    # Override values at or below this are fractions of the outer radius,
    # anything larger is a legacy absolute pixel radius.
    override_fraction_limit: float = 1.5

    drag_threshold_px: float = 5.0
    double_activation_ms: float = 320.0
    transition_ms: float = 360.0
    contour_tension: float = 1.0

    default_wrap_width: float = 150.0
    min_wrap_width: float = 60.0
    max_wrap_width: float = 360.0
    approx_char_px: float = 7.0
    min_wrap_chars: int = 6
    label_offset_px: float = 12.0
    label_line_height: float = 14.0
    axis_label_offset_px: float = 22.0
    axis_label_nudge_px: float = 10.0

    @property
    def positional_ring_ids(self) -> Tuple[str, ...]:
        """Positional rings ordered from the center outwards."""
        return tuple(sorted(self.ring_fractions, key=lambda rid: self.ring_fractions[rid]))

    @property
    def outermost_ring_id(self) -> Optional[str]:
        ids = self.positional_ring_ids
        return ids[-1] if ids else None

    @property
    def inner_committed_ring_ids(self) -> Tuple[str, ...]:
        return tuple(rid for rid in self.positional_ring_ids if rid not in self.band_ring_ids)

    def is_band_ring(self, ring_id: str) -> bool:
        return ring_id in self.band_ring_ids


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    _ENGINE_CONFIG = copy.deepcopy(config)


def resolve_config(config: Optional[EngineConfig]) -> EngineConfig:
    return config if config is not None else _ENGINE_CONFIG

"""Polar frame: axis angles and ring base radii for the current drawing size."""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .config import EngineConfig, resolve_config

Point = Tuple[float, float]

TWO_PI = 2.0 * math.pi


def axis_angle_offset(count: int) -> float:
    """Half-step rotation for 4 and 8 axes so labels stay off the cardinal directions."""
    if count == 4:
        return math.pi / 4.0
    if count == 8:
        return math.pi / 8.0
    return 0.0


def axis_angle(index: int, count: int) -> float:
    """Angle in radians of axis ``index``; index 0 points up, then clockwise in screen space."""
    if count <= 0:
        return 0.0
    return axis_angle_offset(count) + (-math.pi / 2.0 + index * TWO_PI / count)


def axis_angles(count: int) -> np.ndarray:
    if count <= 0:
        return np.zeros(0, dtype=float)
    idx = np.arange(count, dtype=float)
    return axis_angle_offset(count) + (-math.pi / 2.0 + idx * TWO_PI / count)


def ring_base_radius(
    ring_id: str, outer_radius: float, config: Optional[EngineConfig] = None
) -> Optional[float]:
    """Base radius of a positional ring, ``None`` for any other ring id."""
    fraction = resolve_config(config).ring_fractions.get(ring_id)
    if fraction is None:
        return None
    return fraction * outer_radius


def polar_to_cartesian(center: Point, radius: float, angle: float) -> Point:
    cx, cy = center
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def normalize_angle(rad: float) -> float:
    a = math.fmod(rad, TWO_PI)
    if a < 0:
        a += TWO_PI
    return a


def circular_angle_diff(a: float, b: float) -> float:
    d = math.fmod(abs(a - b), TWO_PI)
    return TWO_PI - d if d > math.pi else d

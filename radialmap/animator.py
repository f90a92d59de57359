"""Eased transitions of contour radius arrays.

The animator owns one piece of state, the last rendered radius arrays, and
drives it towards new targets through a host-provided frame scheduler. A new
target cancels the running transition and starts again from whatever is on
screen; there is no queue.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .config import resolve_config

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


class FrameScheduler(ABC):
    """Display-refresh scheduling primitive supplied by the host."""

    @abstractmethod
    def now(self) -> float:
        """Current time in milliseconds."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> int:
        """Run ``callback(timestamp_ms)`` on the next frame; return a cancel handle."""

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Drop a pending request. Unknown or already-run handles are ignored."""


class ManualFrameScheduler(FrameScheduler):
    """Headless scheduler whose frames run only when :meth:`advance` is called."""

    def __init__(self, start_ms: float = 0.0, frame_ms: float = 1000.0 / 60.0) -> None:
        self._time = float(start_ms)
        self.frame_ms = float(frame_ms)
        self._next_handle = 1
        self._pending: Dict[int, FrameCallback] = {}

    def now(self) -> float:
        return self._time

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def step(self) -> int:
        """Advance one frame and run every callback requested before it."""
        self._time += self.frame_ms
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(self._time)
        return len(due)

    def advance(self, ms: float) -> int:
        """Run frames until ``ms`` milliseconds have elapsed; return frames executed."""
        frames = 0
        end = self._time + ms
        while self._time + self.frame_ms <= end + 1e-9:
            self.step()
            frames += 1
        return frames

    def run_until_idle(self, max_frames: int = 10_000) -> int:
        frames = 0
        while self._pending and frames < max_frames:
            self.step()
            frames += 1
        return frames


@dataclass
class _Transition:
    start: np.ndarray
    target: np.ndarray
    started_at: float
    duration: float
    handle: Optional[int] = None


def _conform(values: np.ndarray, shape: Tuple[int, ...]) -> np.ndarray:
    """Zero-pad or truncate ``values`` to ``shape`` (axes added or removed mid-flight)."""
    out = np.zeros(shape, dtype=float)
    if values.ndim != len(shape):
        return out
    region = tuple(slice(0, min(a, b)) for a, b in zip(values.shape, shape))
    out[region] = values[region]
    return out


class ContourAnimator:
    """Interpolates contour radius arrays towards their latest targets."""

    def __init__(
        self,
        initial: np.ndarray,
        scheduler: FrameScheduler,
        *,
        duration_ms: Optional[float] = None,
        on_frame: Optional[Callable[[np.ndarray], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._duration = float(
            duration_ms if duration_ms is not None else resolve_config(None).transition_ms
        )
        self._on_frame = on_frame
        self._current = np.array(initial, dtype=float)
        self._target = self._current.copy()
        self._transition: Optional[_Transition] = None

    @property
    def current(self) -> np.ndarray:
        return self._current.copy()

    @property
    def target(self) -> np.ndarray:
        return self._target.copy()

    @property
    def is_running(self) -> bool:
        return self._transition is not None

    def retarget(self, targets: np.ndarray) -> None:
        """Start animating from the on-screen arrays to ``targets``."""
        target = np.array(targets, dtype=float)
        self.cancel()
        start = _conform(self._current, target.shape)
        self._target = target
        self._transition = _Transition(
            start=start,
            target=target.copy(),
            started_at=self._scheduler.now(),
            duration=self._duration,
        )
        logger.debug(
            "Retargeting contours %s over %.0fms", target.shape, self._duration
        )
        self._transition.handle = self._scheduler.request_frame(self._tick)

    def blended(self, timestamp: float) -> np.ndarray:
        """Arrays the running transition shows at ``timestamp`` (current arrays when idle)."""
        tr = self._transition
        if tr is None:
            return self.current
        if tr.duration <= 0:
            return tr.target.copy()
        raw = min(1.0, max(0.0, (timestamp - tr.started_at) / tr.duration))
        return tr.start + (tr.target - tr.start) * ease_in_out_cubic(raw)

    def _tick(self, timestamp: float) -> None:
        tr = self._transition
        if tr is None:
            return
        tr.handle = None
        elapsed = timestamp - tr.started_at
        if tr.duration <= 0 or elapsed >= tr.duration:
            self._current = tr.target.copy()
            self._transition = None
            logger.debug("Contour transition finished after %.1fms", elapsed)
        else:
            self._current = self.blended(timestamp)
            tr.handle = self._scheduler.request_frame(self._tick)
        if self._on_frame is not None:
            self._on_frame(self.current)

    def cancel(self) -> None:
        """Stop the running transition, keeping the arrays where they are."""
        tr = self._transition
        if tr is None:
            return
        if tr.handle is not None:
            self._scheduler.cancel_frame(tr.handle)
        self._transition = None

    def close(self) -> None:
        self.cancel()

"""Gaze samples and the fixations derived from them.

Coordinates are screen pixels, timestamps milliseconds on a monotonically
non-decreasing clock shared with the session.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GazeSample:
    """Single raw point estimate from the gaze estimator."""

    x: float
    y: float
    timestamp: float

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.timestamp)


@dataclass(frozen=True)
class Fixation:
    """Centroid and timing of a cluster of samples held in one spot."""

    x: float
    y: float
    start_time: float
    duration: float
    target_span_id: Optional[str] = None

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


@dataclass(frozen=True)
class Viewport:
    """Visible screen area used to judge off-screen samples."""

    width: float
    height: float

    def contains(self, x, y, margin: float = 0.0):
        """Whether ``(x, y)`` lies inside the viewport grown by ``margin``.

        Accepts scalars or numpy arrays; edges count as inside.
        """
        return (x >= -margin) & (x <= self.width + margin) & (y >= -margin) & (y <= self.height + margin)

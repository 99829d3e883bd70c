"""Incremental dispersion clustering of filtered samples into fixations.

A candidate joins the current cluster when it lies within ``radius`` of the
centroid of the samples already in the cluster; the candidate itself is not
part of that centroid. Otherwise the cluster is finalized and a new one
starts at the candidate.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from ..config import FixationConfig, RadiusLimits, clamp, radius_from_calibration_error
from ..domain.samples import Fixation, GazeSample

logger = logging.getLogger(__name__)

HitTest = Callable[[float, float], Optional[str]]
FixationCallback = Callable[[Fixation], None]


def centroid(points: Sequence[GazeSample]) -> Tuple[float, float]:
    n = len(points)
    return sum(p.x for p in points) / n, sum(p.y for p in points) / n


class FixationDetector:
    """Turn a stream of smoothed samples into discrete fixation events."""

    def __init__(
        self,
        config: FixationConfig | None = None,
        hit_test: HitTest | None = None,
        on_fixation: FixationCallback | None = None,
    ) -> None:
        self.config = config or FixationConfig()
        self.radius = self.config.effective_radius()
        self.min_duration = self.config.min_duration_ms
        self.hit_test = hit_test
        self.on_fixation = on_fixation
        self._cluster: List[GazeSample] = []

    @staticmethod
    def radius_from_calibration_error(average_error_px: float) -> float:
        return radius_from_calibration_error(average_error_px)

    def set_radius(self, radius_px: float) -> None:
        """Set the radius directly; the cluster in progress is kept."""
        self.radius = clamp(radius_px, RadiusLimits.DIRECT_MIN_PX, RadiusLimits.DIRECT_MAX_PX)

    def set_calibration_error(self, average_error_px: Optional[float]) -> None:
        if average_error_px is None:
            self.radius = self.config.radius_px
        else:
            self.radius = radius_from_calibration_error(average_error_px, self.config.radius_error_scale)
        logger.debug("Fixation radius set to %.1f px", self.radius)

    @property
    def cluster_size(self) -> int:
        return len(self._cluster)

    def add_point(self, sample: GazeSample) -> Optional[Fixation]:
        """Feed one sample; returns a fixation when a cluster breaks."""
        if not self._cluster:
            self._cluster.append(sample)
            return None

        cx, cy = centroid(self._cluster)
        if math.hypot(sample.x - cx, sample.y - cy) <= self.radius:
            self._cluster.append(sample)
            return None

        fixation = self._finalize()
        self._cluster = [sample]
        return fixation

    def flush(self) -> Optional[Fixation]:
        """Finalize whatever cluster is in progress and clear state."""
        fixation = self._finalize()
        self._cluster = []
        return fixation

    def reset(self) -> None:
        self._cluster = []

    def _finalize(self) -> Optional[Fixation]:
        cluster = self._cluster
        if len(cluster) < 2:
            return None

        duration = cluster[-1].timestamp - cluster[0].timestamp
        if duration < self.min_duration:
            logger.debug("Discarded cluster of %d samples (%.0f ms)", len(cluster), duration)
            return None

        cx, cy = centroid(cluster)
        span_id = self.hit_test(cx, cy) if self.hit_test is not None else None
        fixation = Fixation(
            x=cx,
            y=cy,
            start_time=cluster[0].timestamp,
            duration=duration,
            target_span_id=span_id,
        )
        logger.debug("Fixation at (%.1f, %.1f) for %.0f ms on %s", cx, cy, duration, span_id)
        if self.on_fixation is not None:
            self.on_fixation(fixation)
        return fixation

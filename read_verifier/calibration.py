"""Calibration accuracy measurement.

The average distance between gaze estimates and known targets drives the
fixation radius and is graded for the user.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .config import CalibrationThresholds, radius_from_calibration_error
from .domain.samples import GazeSample

logger = logging.getLogger(__name__)


class CalibrationQuality(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


def point_error(target: Tuple[float, float], samples: Sequence[GazeSample]) -> float:
    """Mean Euclidean distance (px) of ``samples`` to ``target``."""
    if not samples:
        return 0.0
    tx, ty = target
    return sum(math.hypot(s.x - tx, s.y - ty) for s in samples) / len(samples)


def quality_from_error(average_error_px: float) -> CalibrationQuality:
    if average_error_px < CalibrationThresholds.EXCELLENT_PX:
        return CalibrationQuality.EXCELLENT
    if average_error_px < CalibrationThresholds.GOOD_PX:
        return CalibrationQuality.GOOD
    if average_error_px < CalibrationThresholds.FAIR_PX:
        return CalibrationQuality.FAIR
    return CalibrationQuality.POOR


@dataclass(frozen=True)
class CalibrationState:
    average_error: float
    quality: CalibrationQuality

    @property
    def fixation_radius(self) -> float:
        return radius_from_calibration_error(self.average_error)


class CalibrationValidator:
    """Collect one error per validation target and grade the average."""

    def __init__(self) -> None:
        self.errors: List[float] = []

    def add_point(self, target: Tuple[float, float], samples: Sequence[GazeSample]) -> float:
        finite = [s for s in samples if s.is_finite()]
        error = point_error(target, finite)
        self.errors.append(error)
        logger.debug("Validation target %s: error %.1f px from %d samples", target, error, len(finite))
        return error

    @property
    def average_error(self) -> Optional[float]:
        if not self.errors:
            return None
        return sum(self.errors) / len(self.errors)

    def result(self) -> Optional[CalibrationState]:
        average = self.average_error
        if average is None:
            return None
        state = CalibrationState(average, quality_from_error(average))
        logger.info("Calibration %s (average error %.1f px)", state.quality.value, average)
        return state

    def reset(self) -> None:
        self.errors = []

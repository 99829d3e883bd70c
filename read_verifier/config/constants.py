# read_verifier/config/constants.py
"""Defaults and limits for the reading verification pipeline."""

from __future__ import annotations


class ReadingDefaults:
    """Documented defaults of every pipeline component."""

    # Adaptive smoothing (One Euro filter)
    SMOOTHING_FREQUENCY_HZ: float = 30.0
    SMOOTHING_MIN_CUTOFF: float = 1.5
    SMOOTHING_BETA: float = 0.01
    SMOOTHING_D_CUTOFF: float = 1.0

    # Outlier rejection
    OUTLIER_WINDOW_SIZE: int = 20
    OUTLIER_WARMUP_SAMPLES: int = 5
    OUTLIER_Z_THRESHOLD: float = 3.0
    OUTLIER_MIN_STD_PX: float = 10.0

    # Fixation detection
    FIXATION_RADIUS_PX: float = 50.0
    FIXATION_MIN_DURATION_MS: float = 100.0
    FIXATION_RADIUS_ERROR_SCALE: float = 0.65

    # Region read tracking
    READ_THRESHOLD_MS: float = 250.0

    # Drift monitoring
    DRIFT_WINDOW_MS: float = 10000.0
    DRIFT_CHECK_INTERVAL_MS: float = 5000.0
    DRIFT_NO_DATA_TIMEOUT_MS: float = 3000.0
    DRIFT_MIN_SAMPLES: int = 10
    DRIFT_MARGIN_PX: float = 50.0
    DRIFT_OFF_SCREEN_RATIO: float = 0.4
    VIEWPORT_WIDTH_PX: float = 1920.0
    VIEWPORT_HEIGHT_PX: float = 1080.0

    # Verdict thresholds
    VERIFIED_COVERAGE_PERCENT: float = 80.0
    VERIFIED_MIN_FIXATION_MS: float = 100.0
    PARTIAL_COVERAGE_PERCENT: float = 40.0
    SKIMMED_COVERAGE_PERCENT: float = 5.0
    SPANS_PER_PAGE_ESTIMATE: int = 50


class RadiusLimits:
    """Clamp ranges for the fixation radius (px)."""

    # Radius derived from calibration error
    ADAPTIVE_MIN_PX: float = 30.0
    ADAPTIVE_MAX_PX: float = 150.0

    # Radius set directly
    DIRECT_MIN_PX: float = 20.0
    DIRECT_MAX_PX: float = 200.0


class CalibrationThresholds:
    """Average calibration error (px) upper bounds per quality grade."""

    EXCELLENT_PX: float = 75.0
    GOOD_PX: float = 125.0
    FAIR_PX: float = 200.0


class StatusMessages:
    """Human readable drift status messages."""

    LOST = "Face not detected. Please reposition in front of the camera."
    DRIFT = "Eye tracking may have drifted. Consider re-calibrating."
    OK = ""

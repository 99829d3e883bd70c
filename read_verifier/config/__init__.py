"""Configuration and constants for the reading verification pipeline."""

from .config import (
    DriftConfig,
    FixationConfig,
    OutlierConfig,
    ReadTrackerConfig,
    ScoringConfig,
    SessionConfiguration,
    SmoothingConfig,
    clamp,
    radius_from_calibration_error,
)
from .constants import CalibrationThresholds, RadiusLimits, ReadingDefaults, StatusMessages
from .config_builder import ConfigBuilder

__all__ = [
    "DriftConfig",
    "FixationConfig",
    "OutlierConfig",
    "ReadTrackerConfig",
    "ScoringConfig",
    "SessionConfiguration",
    "SmoothingConfig",
    "clamp",
    "radius_from_calibration_error",
    "CalibrationThresholds",
    "RadiusLimits",
    "ReadingDefaults",
    "StatusMessages",
    "ConfigBuilder",
]

# read_verifier/config/config_builder.py
"""Build configuration objects from CLI arguments.

Separates configuration construction from argument parsing (SRP).
"""
from __future__ import annotations

import argparse

from .config import (
    DriftConfig,
    FixationConfig,
    OutlierConfig,
    ReadTrackerConfig,
    SessionConfiguration,
    SmoothingConfig,
)


class ConfigBuilder:
    """Builds configuration objects from parsed CLI arguments.

    Missing attributes fall back to the dataclass defaults, so sub-commands
    only need to declare the options they expose.
    """

    @staticmethod
    def build_smoothing_config(args: argparse.Namespace) -> SmoothingConfig:
        defaults = SmoothingConfig()
        return SmoothingConfig(
            frequency_hz=getattr(args, "frequency", defaults.frequency_hz),
            min_cutoff=getattr(args, "min_cutoff", defaults.min_cutoff),
            beta=getattr(args, "beta", defaults.beta),
            d_cutoff=getattr(args, "d_cutoff", defaults.d_cutoff),
        )

    @staticmethod
    def build_outlier_config(args: argparse.Namespace) -> OutlierConfig:
        defaults = OutlierConfig()
        return OutlierConfig(
            window_size=getattr(args, "outlier_window", defaults.window_size),
            z_threshold=getattr(args, "z_threshold", defaults.z_threshold),
        )

    @staticmethod
    def build_fixation_config(args: argparse.Namespace) -> FixationConfig:
        defaults = FixationConfig()
        return FixationConfig(
            radius_px=getattr(args, "radius", defaults.radius_px),
            min_duration_ms=getattr(args, "min_duration", defaults.min_duration_ms),
            calibration_error_px=getattr(args, "calibration_error", None),
        )

    @staticmethod
    def build_tracker_config(args: argparse.Namespace) -> ReadTrackerConfig:
        defaults = ReadTrackerConfig()
        return ReadTrackerConfig(
            read_threshold_ms=getattr(args, "read_threshold", defaults.read_threshold_ms),
        )

    @staticmethod
    def build_drift_config(args: argparse.Namespace) -> DriftConfig:
        defaults = DriftConfig()
        viewport = getattr(args, "viewport", None) or (defaults.viewport_width, defaults.viewport_height)
        return DriftConfig(
            margin_px=getattr(args, "drift_margin", defaults.margin_px),
            viewport_width=viewport[0],
            viewport_height=viewport[1],
        )

    @classmethod
    def build_session_config(cls, args: argparse.Namespace) -> SessionConfiguration:
        """Build the complete session configuration from CLI arguments."""
        return SessionConfiguration(
            smoothing=cls.build_smoothing_config(args),
            outlier=cls.build_outlier_config(args),
            fixation=cls.build_fixation_config(args),
            tracker=cls.build_tracker_config(args),
            drift=cls.build_drift_config(args),
        )

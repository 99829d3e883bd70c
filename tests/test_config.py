import argparse

import pytest

from read_verifier.config import (
    ConfigBuilder,
    DriftConfig,
    FixationConfig,
    OutlierConfig,
    ReadingDefaults,
    ScoringConfig,
    SessionConfiguration,
    radius_from_calibration_error,
)


def test_defaults():
    cfg = SessionConfiguration()
    assert cfg.smoothing.frequency_hz == 30.0
    assert cfg.smoothing.min_cutoff == 1.5
    assert cfg.outlier.window_size == 20
    assert cfg.outlier.z_threshold == 3.0
    assert cfg.fixation.radius_px == 50.0
    assert cfg.fixation.min_duration_ms == 100.0
    assert cfg.tracker.read_threshold_ms == 250.0
    assert cfg.drift.check_interval_ms == 5000.0
    assert cfg.drift.off_screen_ratio == 0.4
    assert cfg.scoring.verified_coverage == 80.0


def test_out_of_range_values_are_clamped():
    assert FixationConfig(radius_px=1.0).radius_px == 20.0
    assert FixationConfig(radius_px=999.0).radius_px == 200.0
    assert FixationConfig(min_duration_ms=-5).min_duration_ms == 0.0

    outlier = OutlierConfig(window_size=0, warmup_samples=10)
    assert outlier.window_size == 1
    assert outlier.warmup_samples == 1

    assert DriftConfig(off_screen_ratio=2.0).off_screen_ratio == 1.0
    assert ScoringConfig(partial_coverage=150.0).partial_coverage == 100.0


def test_effective_radius_uses_calibration_error():
    assert FixationConfig().effective_radius() == 50.0
    assert FixationConfig(calibration_error_px=100.0).effective_radius() == pytest.approx(65.0)
    assert FixationConfig(calibration_error_px=0.0).effective_radius() == 30.0
    assert radius_from_calibration_error(1000.0) == 150.0


def test_config_builder_reads_cli_arguments():
    args = argparse.Namespace(
        min_cutoff=2.0,
        beta=0.05,
        radius=70.0,
        min_duration=80.0,
        calibration_error=None,
        read_threshold=300.0,
        z_threshold=4.0,
        viewport=(1280.0, 720.0),
    )
    cfg = ConfigBuilder.build_session_config(args)

    assert cfg.smoothing.min_cutoff == 2.0
    assert cfg.smoothing.beta == 0.05
    assert cfg.fixation.radius_px == 70.0
    assert cfg.fixation.min_duration_ms == 80.0
    assert cfg.tracker.read_threshold_ms == 300.0
    assert cfg.outlier.z_threshold == 4.0
    assert cfg.drift.viewport_width == 1280.0
    assert cfg.drift.viewport_height == 720.0


def test_config_builder_falls_back_to_defaults():
    cfg = ConfigBuilder.build_session_config(argparse.Namespace())
    assert cfg.smoothing.d_cutoff == ReadingDefaults.SMOOTHING_D_CUTOFF
    assert cfg.outlier.window_size == ReadingDefaults.OUTLIER_WINDOW_SIZE
    assert cfg.fixation.calibration_error_px is None
    assert cfg.drift.viewport_width == ReadingDefaults.VIEWPORT_WIDTH_PX

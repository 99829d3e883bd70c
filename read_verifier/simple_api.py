# read_verifier/simple_api.py
"""Simple user-friendly API for verifying a recorded reading session.

Example:
    >>> from read_verifier.simple_api import verify_reading
    >>>
    >>> # Simplest usage - samples and span layout
    >>> result = verify_reading("samples.tsv", "regions.tsv")
    >>> result.verdict
    >>>
    >>> # With the calibration error measured before reading
    >>> result = verify_reading("samples.tsv", "regions.tsv", calibration_error=110.0)
"""
from __future__ import annotations

from typing import Optional, Sequence

from .config import FixationConfig, ReadTrackerConfig, SessionConfiguration
from .domain.report import VerificationResult
from .domain.samples import GazeSample
from .io.pipeline import ReplayPipeline
from .regions import RegionLookup


def _config(read_threshold_ms: float, min_fixation_ms: float) -> SessionConfiguration:
    return SessionConfiguration(
        fixation=FixationConfig(min_duration_ms=min_fixation_ms),
        tracker=ReadTrackerConfig(read_threshold_ms=read_threshold_ms),
    )


def verify_reading(
    samples_path: str,
    regions_path: str,
    calibration_error: Optional[float] = None,
    read_threshold_ms: float = 250.0,
    min_fixation_ms: float = 100.0,
) -> VerificationResult:
    """
    Replay recorded samples against a span layout and return the verdict.

    Args:
        samples_path: TSV with ``time_ms``, ``x_px``, ``y_px``
        regions_path: TSV with ``span_id``, ``page_index``, ``left``, ``top``, ``width``, ``height``
        calibration_error: Average calibration error (px); widens the fixation radius
        read_threshold_ms: Dwell time after which a span counts as read
        min_fixation_ms: Shorter clusters are not fixations
    """
    pipeline = ReplayPipeline(_config(read_threshold_ms, min_fixation_ms))
    result = pipeline.run(samples_path, regions_path, calibration_error=calibration_error)
    return result.verification


def verify_samples(
    samples: Sequence[GazeSample],
    regions: RegionLookup,
    calibration_error: Optional[float] = None,
    read_threshold_ms: float = 250.0,
    min_fixation_ms: float = 100.0,
) -> VerificationResult:
    """In-memory variant of :func:`verify_reading`."""
    pipeline = ReplayPipeline(_config(read_threshold_ms, min_fixation_ms))
    return pipeline.replay(samples, regions, calibration_error=calibration_error).verification

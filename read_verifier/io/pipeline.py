"""Offline replay of a recorded gaze stream.

Separates replay orchestration from CLI and configuration (SRP). The
session is driven by a :class:`ManualClock` that follows the sample
timestamps, so drift checks fire exactly as they would have live.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..config import SessionConfiguration
from ..domain.report import VerificationResult
from ..domain.samples import Fixation, GazeSample, Viewport
from ..domain.state import DriftReport
from ..engine import ReadingSession, SessionStats
from ..regions import RegionLookup
from ..tracking import ManualClock
from .io import (
    fixations_to_frame,
    read_gaze_samples,
    read_map_to_frame,
    read_regions,
    samples_to_frame,
    verification_to_frame,
    write_tsv,
)
from .observers import SessionRecorder

logger = logging.getLogger(__name__)


@dataclass
class ReplayResult:
    """Everything a replay produced."""

    verification: VerificationResult
    fixations: List[Fixation]
    drift_reports: List[DriftReport] = field(default_factory=list)
    stats: SessionStats = field(default_factory=SessionStats)


class ReplayPipeline:
    """Replays recorded samples through a :class:`ReadingSession`.

    Example:
        >>> pipeline = ReplayPipeline(SessionConfiguration())
        >>> pipeline.register_observer(ConsoleReporter())
        >>> result = pipeline.run("samples.tsv", "regions.tsv")
        >>> result.verification.verdict
    """

    def __init__(self, config: Optional[SessionConfiguration] = None):
        self.config = config or SessionConfiguration()
        self._observers: List[Any] = []  # SessionObserver instances

    def register_observer(self, observer: Any) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: Any) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def replay(
        self,
        samples: Sequence[GazeSample],
        regions: RegionLookup,
        calibration_error: Optional[float] = None,
    ) -> ReplayResult:
        """Run in-memory samples through a fresh session."""
        if not samples:
            raise ValueError("Cannot replay an empty recording.")

        first = next((s.timestamp for s in samples if s.is_finite()), 0.0)
        clock = ManualClock(start=first)
        session = ReadingSession(regions, self.config, clock=clock)
        recorder = SessionRecorder()
        session.register_observer(recorder)
        for observer in self._observers:
            session.register_observer(observer)

        if calibration_error is not None:
            session.set_calibration_error(calibration_error)

        session.start()
        for sample in samples:
            # Only well-formed samples move the clock
            if sample.is_finite():
                clock.advance_to(sample.timestamp)
            session.process_sample(sample)
            session.poll()

        # Flushes the last cluster into the recorder
        verification = session.stop()

        logger.info(
            "Replayed %d samples: %d rejected, %d malformed, %d fixations",
            session.stats.samples_received,
            session.stats.samples_rejected,
            session.stats.samples_malformed,
            len(recorder.fixations),
        )
        return ReplayResult(
            verification=verification,
            fixations=list(recorder.fixations),
            drift_reports=list(recorder.reports),
            stats=session.stats,
        )

    def run(
        self,
        samples_path: str,
        regions_path: str,
        fixations_path: Optional[str] = None,
        read_map_path: Optional[str] = None,
        plot_path: Optional[str] = None,
        calibration_error: Optional[float] = None,
        summary_path: Optional[str] = None,
    ) -> ReplayResult:
        """Replay TSV files and optionally write fixations, read map, summary and a plot."""
        samples = read_gaze_samples(samples_path)
        regions = read_regions(regions_path)
        logger.info("Loaded %d samples and %d spans", len(samples), regions.total_span_count())

        result = self.replay(samples, regions, calibration_error=calibration_error)

        if fixations_path:
            write_tsv(fixations_to_frame(result.fixations), fixations_path)
        if read_map_path:
            write_tsv(read_map_to_frame(result.verification.read_map), read_map_path)
        if summary_path:
            write_tsv(verification_to_frame(result.verification), summary_path)
        if plot_path:
            from ..evaluation.plotting import plot_reading_session

            drift_cfg = self.config.drift
            plot_reading_session(
                samples_to_frame(s for s in samples if s.is_finite()),
                fixations_to_frame(result.fixations),
                plot_path,
                viewport=Viewport(drift_cfg.viewport_width, drift_cfg.viewport_height),
            )
        return result

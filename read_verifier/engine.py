"""High level reading session orchestration.

One :class:`ReadingSession` owns one instance of every pipeline component and
the only mutable tables (the read map and the drift window). Each sample is
processed synchronously end to end::

    raw sample -> drop non-finite -> drift window
               -> outlier rejector -> smoothing filter
               -> fixation detector -> read tracker
"""
from __future__ import annotations

import logging
import math
from collections.abc import Container
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .calibration import CalibrationState
from .config import SessionConfiguration
from .detection import FixationDetector
from .domain.report import VerificationResult
from .domain.samples import Fixation, GazeSample
from .domain.state import DriftReport, DriftStatus, ReadStatus, RegionReadState
from .evaluation.verification import compute_verification
from .filters import GazeFilter, OutlierRejector
from .regions import PagedRegionLookup, RegionIndex, RegionLookup, page_index_from_span_id
from .stream import GazeStream, Subscription
from .tracking import DriftMonitor, ReadTracker
from .tracking.drift import Clock, monotonic_ms

logger = logging.getLogger(__name__)


@dataclass
class SessionStats:
    """Counters of what happened to the incoming samples."""

    samples_received: int = 0
    samples_malformed: int = 0
    samples_rejected: int = 0
    fixations_detected: int = 0
    fixations_on_text: int = 0


@dataclass(frozen=True)
class ReadProgress:
    read_count: int
    total_spans: int
    coverage_percent: float


class ReadingSession:
    """Turn one gaze stream into a verified account of one document."""

    def __init__(
        self,
        regions: RegionLookup | None = None,
        config: SessionConfiguration | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config or SessionConfiguration()
        self.regions: RegionLookup = regions if regions is not None else RegionIndex()
        self.clock = clock or monotonic_ms

        cfg = self.config
        self.gaze_filter = GazeFilter(cfg.smoothing)
        self.outlier_rejector = OutlierRejector(cfg.outlier)
        self.fixation_detector = FixationDetector(cfg.fixation, hit_test=self.regions.hit_test)
        self.read_tracker = ReadTracker(cfg.tracker)
        self.drift_monitor = DriftMonitor(cfg.drift, clock=self.clock)

        self.stats = SessionStats()
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self._subscription: Optional[Subscription] = None
        self._observers: List[Any] = []  # SessionObserver instances

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def register_observer(self, observer: Any) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: Any) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, hook: str, *args: Any) -> None:
        for observer in self._observers:
            try:
                getattr(observer, hook)(*args)
            except Exception as e:
                logger.warning("Observer %s failed on %s: %s", type(observer).__name__, hook, e)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self.start_time is not None and self.end_time is None

    def start(self, now: Optional[float] = None) -> None:
        now = self.clock() if now is None else now
        self.start_time = now
        self.end_time = None
        self.drift_monitor.start(self._on_drift, now=now)
        logger.info("Reading session started with %d spans", self.regions.total_span_count())
        self._notify("on_session_start", self)

    def attach(self, stream: GazeStream) -> Subscription:
        """Subscribe to ``stream``, replacing whatever listener it had."""
        self.detach()
        self._subscription = stream.set_listener(self.process_sample)
        return self._subscription

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def stop(self, now: Optional[float] = None) -> VerificationResult:
        """Detach, flush the cluster in progress and stop drift checks.

        Calling ``stop`` again only recomputes the verification.
        """
        if not self.is_active:
            return self.verify(now)

        now = self.clock() if now is None else now
        self.detach()
        fixation = self.fixation_detector.flush()
        if fixation is not None:
            self._record(fixation)
        self.drift_monitor.stop()
        self.end_time = now

        result = self.verify(now)
        logger.info(
            "Reading session stopped: %.1f%% coverage, verdict %s",
            result.coverage_percent,
            result.verdict.value,
        )
        self._notify("on_session_complete", self, result)
        return result

    # ------------------------------------------------------------------
    # Sample processing
    # ------------------------------------------------------------------
    def process_sample(self, sample: GazeSample) -> Optional[Fixation]:
        """Run one raw sample through the pipeline."""
        self.stats.samples_received += 1
        if not sample.is_finite():
            self.stats.samples_malformed += 1
            return None

        self.drift_monitor.add_point(sample, now=self.clock())

        if self.outlier_rejector.is_outlier(sample):
            self.stats.samples_rejected += 1
            return None

        x, y = self.gaze_filter.filter(sample.x, sample.y, sample.timestamp)
        fixation = self.fixation_detector.add_point(GazeSample(x, y, sample.timestamp))
        if fixation is not None:
            self._record(fixation)
        return fixation

    def poll(self, now: Optional[float] = None) -> Optional[DriftReport]:
        """Advance the drift check cadence; call from the host event loop."""
        return self.drift_monitor.poll(now)

    def _record(self, fixation: Fixation) -> None:
        self.stats.fixations_detected += 1
        if fixation.target_span_id is not None:
            self.stats.fixations_on_text += 1
        self.read_tracker.record_fixation(fixation)
        self._notify("on_fixation", self, fixation)

    def _on_drift(self, report: DriftReport) -> None:
        self._notify("on_drift_status", self, report)

    # ------------------------------------------------------------------
    # Calibration and layout
    # ------------------------------------------------------------------
    def set_calibration_error(self, average_error_px: Optional[float]) -> None:
        self.fixation_detector.set_calibration_error(average_error_px)
        logger.info("Calibration error %s -> fixation radius %.1f px", average_error_px, self.fixation_detector.radius)

    def apply_calibration(self, state: CalibrationState) -> None:
        """Adopt the average error of a finished calibration validation."""
        self.set_calibration_error(state.average_error)
        logger.info("Calibration quality %s", state.quality.value)

    def invalidate_calibration(self) -> None:
        """Drop filter state learned under the old calibration."""
        self.gaze_filter.reset()
        self.outlier_rejector.reset()
        self.fixation_detector.set_calibration_error(None)
        logger.info("Calibration invalidated; smoothing and outlier state reset")

    def set_viewport(self, width: float, height: float) -> None:
        self.drift_monitor.set_viewport(width, height)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def drift_status(self) -> Optional[DriftStatus]:
        return self.drift_monitor.status

    def region_status(self, span_id: str) -> ReadStatus:
        return self.read_tracker.status(span_id)

    def read_map(self) -> Dict[str, RegionReadState]:
        return self.read_tracker.snapshot()

    def progress(self) -> ReadProgress:
        total = self.regions.total_span_count()
        return ReadProgress(
            read_count=self.read_tracker.read_count(self._known_span_ids()),
            total_spans=total,
            coverage_percent=self.read_tracker.coverage_percent(total, self._known_span_ids()),
        )

    def verify(self, now: Optional[float] = None) -> VerificationResult:
        read_map = self.read_tracker.snapshot()
        total_spans = self.regions.total_span_count()

        if self.start_time is None:
            total_read_time = 0.0
        else:
            end = self.end_time
            if end is None:
                end = self.clock() if now is None else now
            total_read_time = max(0.0, end - self.start_time)

        return compute_verification(
            read_map,
            total_spans=total_spans,
            total_read_time=total_read_time,
            pages_read=self._pages_read(read_map),
            total_pages=self._total_pages(total_spans),
            config=self.config.scoring,
            known_span_ids=self._known_span_ids(),
        )

    def _known_span_ids(self) -> Optional[Container]:
        # Read-map ids the registry no longer holds are not counted
        return self.regions if isinstance(self.regions, Container) else None

    def _pages_read(self, read_map: Dict[str, RegionReadState]) -> int:
        if isinstance(self.regions, PagedRegionLookup):
            page_of = self.regions.page_of
        else:
            page_of = page_index_from_span_id
        known = self._known_span_ids()
        pages = {
            page_of(span_id)
            for span_id, state in read_map.items()
            if state.is_read and (known is None or span_id in known)
        }
        pages.discard(None)
        return len(pages)

    def _total_pages(self, total_spans: int) -> int:
        if isinstance(self.regions, PagedRegionLookup):
            return self.regions.page_count()
        if total_spans <= 0:
            return 0
        return math.ceil(total_spans / self.config.scoring.spans_per_page_estimate)

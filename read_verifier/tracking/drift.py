"""Watchdog over the raw gaze stream for tracking loss and drift.

The monitor keeps the raw samples of the trailing window, keyed by their
arrival time on the monitor clock, and runs a check on a fixed cadence.
The cadence is advanced by :meth:`DriftMonitor.poll`, which the host calls
from its own event loop; nothing here starts a thread.
"""
from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Deque, Optional, Tuple

import numpy as np

from ..config import DriftConfig, StatusMessages
from ..domain.samples import GazeSample, Viewport
from ..domain.state import DriftReport, DriftStatus

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
DriftListener = Callable[[DriftReport], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class ManualClock:
    """Clock advanced explicitly, e.g. to the timestamps of a replayed recording."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance_to(self, timestamp: float) -> None:
        # Never run backwards
        self.now = max(self.now, float(timestamp))


class DriftMonitor:
    """Detect total loss of samples and systematic off-screen drift."""

    def __init__(self, config: DriftConfig | None = None, clock: Clock | None = None) -> None:
        self.config = config or DriftConfig()
        self.clock = clock or monotonic_ms
        self.viewport = Viewport(self.config.viewport_width, self.config.viewport_height)
        self._samples: Deque[Tuple[float, GazeSample]] = deque()
        self._last_sample_time = self.clock()
        self._last_check: Optional[float] = None
        self._listener: Optional[DriftListener] = None
        self.current: Optional[DriftReport] = None

    @property
    def running(self) -> bool:
        return self._listener is not None

    @property
    def status(self) -> Optional[DriftStatus]:
        return self.current.status if self.current is not None else None

    def window_size(self) -> int:
        return len(self._samples)

    def set_viewport(self, width: float, height: float) -> None:
        self.viewport = Viewport(max(0.0, float(width)), max(0.0, float(height)))

    def start(self, listener: DriftListener, now: Optional[float] = None) -> None:
        """Begin periodic checks; the first one is due one interval from now."""
        now = self.clock() if now is None else now
        self._listener = listener
        self._last_sample_time = now
        self._last_check = now

    def stop(self) -> None:
        """Stop checks and drop the window; safe to call repeatedly."""
        self._listener = None
        self._last_check = None
        self._samples.clear()

    def add_point(self, sample: GazeSample, now: Optional[float] = None) -> None:
        """Record a raw sample at its arrival time on the monitor's clock.

        The sample's own timestamp is ignored here; estimators stamp
        samples on their own timebase.
        """
        now = self.clock() if now is None else now
        self._last_sample_time = now
        self._samples.append((now, sample))
        cutoff = now - self.config.window_ms
        while self._samples and self._samples[0][0] <= cutoff:
            self._samples.popleft()

    def poll(self, now: Optional[float] = None) -> Optional[DriftReport]:
        """Run a check if the cadence interval has elapsed."""
        if not self.running or self._last_check is None:
            return None
        now = self.clock() if now is None else now
        if now - self._last_check < self.config.check_interval_ms:
            return None
        self._last_check = now
        return self.check(now)

    def check(self, now: Optional[float] = None) -> Optional[DriftReport]:
        """Evaluate the window once; ``None`` leaves the status unchanged."""
        cfg = self.config
        now = self.clock() if now is None else now

        if now - self._last_sample_time > cfg.no_data_timeout_ms:
            return self._report(DriftReport(DriftStatus.LOST, StatusMessages.LOST, now))

        if len(self._samples) < cfg.min_samples:
            return None

        ratio = self.off_screen_ratio()
        logger.debug("Drift check: %d samples, %.0f%% off-screen", len(self._samples), ratio * 100)
        if ratio > cfg.off_screen_ratio:
            return self._report(DriftReport(DriftStatus.WARNING, StatusMessages.DRIFT, now))
        return self._report(DriftReport(DriftStatus.OK, StatusMessages.OK, now))

    def off_screen_ratio(self) -> float:
        if not self._samples:
            return 0.0
        n = len(self._samples)
        xs = np.fromiter((s.x for _, s in self._samples), dtype=float, count=n)
        ys = np.fromiter((s.y for _, s in self._samples), dtype=float, count=n)
        inside = self.viewport.contains(xs, ys, self.config.margin_px)
        return 1.0 - float(np.mean(inside))

    def _report(self, report: DriftReport) -> DriftReport:
        previous = self.status
        self.current = report
        if report.status != previous and report.status != DriftStatus.OK:
            logger.warning("Drift status %s: %s", report.status.value, report.message)
        if self._listener is not None:
            self._listener(report)
        return report

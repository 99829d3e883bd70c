# read_verifier/io/observers.py
"""
Observer Pattern for reading sessions.

Observers decouple the session from reporting, logging and collection of
its outputs.

Example:
    >>> from read_verifier.engine import ReadingSession
    >>> from read_verifier.io.observers import ConsoleReporter, FixationLogger
    >>>
    >>> session = ReadingSession(regions)
    >>> session.register_observer(ConsoleReporter())
    >>> session.register_observer(FixationLogger("logs/fixations.tsv"))
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from ..domain.report import VerificationResult
from ..domain.samples import Fixation
from ..domain.state import DriftReport, DriftStatus
from ..evaluation.verification import verdict_label


class SessionObserver(ABC):
    """
    Abstract base class for session observers.

    Exceptions raised by an observer are logged by the session and do not
    stop the other observers.
    """

    @abstractmethod
    def on_session_start(self, session) -> None:
        """Called when the session starts."""

    @abstractmethod
    def on_fixation(self, session, fixation: Fixation) -> None:
        """Called for every fixation the detector emits (also off-text ones)."""

    @abstractmethod
    def on_drift_status(self, session, report: DriftReport) -> None:
        """Called after every drift check that produced a status."""

    @abstractmethod
    def on_session_complete(self, session, result: VerificationResult) -> None:
        """Called once when the session stops."""


class ConsoleReporter(SessionObserver):
    """
    Reports session progress and the final verdict on the console.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self._last_status = None

    def on_session_start(self, session) -> None:
        print(f"\n{'='*70}")
        print(f"Reading session started ({session.regions.total_span_count()} spans)")
        print(f"   Fixation radius: {session.fixation_detector.radius:.1f} px")
        print(f"   Read threshold: {session.read_tracker.read_threshold:.0f} ms")
        print(f"{'='*70}\n")

    def on_fixation(self, session, fixation: Fixation) -> None:
        if not self.verbose:
            return
        target = fixation.target_span_id or "-"
        print(f"   fixation {fixation.duration:6.0f} ms at ({fixation.x:7.1f}, {fixation.y:7.1f}) -> {target}")

    def on_drift_status(self, session, report: DriftReport) -> None:
        if report.status == self._last_status:
            return
        self._last_status = report.status
        if report.status != DriftStatus.OK:
            print(f"Warning: {report.message}")

    def on_session_complete(self, session, result: VerificationResult) -> None:
        print(f"\n{'='*70}")
        print(f"Verdict: {verdict_label(result.verdict)}")
        print(f"   Coverage: {result.coverage_percent:.1f}% ({result.read_count} spans read)")
        print(f"   Avg fixation: {result.average_fixation_duration:.0f} ms")
        print(f"   Pages: {result.pages_read}/{result.total_pages}")
        print(f"   Read time: {result.total_read_time / 1000.0:.1f} s")
        print(f"{'='*70}\n")


class FixationLogger(SessionObserver):
    """
    Appends every fixation to a TSV file for later analysis.
    """

    HEADER = ["start_time_ms", "duration_ms", "x_px", "y_px", "target_span_id"]

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        if not self.log_file.exists():
            with open(self.log_file, "w", encoding="utf-8") as f:
                f.write("\t".join(self.HEADER) + "\n")

    def on_session_start(self, session) -> None:
        pass

    def on_fixation(self, session, fixation: Fixation) -> None:
        row = [
            f"{fixation.start_time:.3f}",
            f"{fixation.duration:.3f}",
            f"{fixation.x:.3f}",
            f"{fixation.y:.3f}",
            fixation.target_span_id or "",
        ]
        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write("\t".join(row) + "\n")

    def on_drift_status(self, session, report: DriftReport) -> None:
        pass

    def on_session_complete(self, session, result: VerificationResult) -> None:
        pass


class SessionRecorder(SessionObserver):
    """
    Collects every fixation and drift report in memory.
    """

    def __init__(self) -> None:
        self.fixations: List[Fixation] = []
        self.reports: List[DriftReport] = []

    def on_session_start(self, session) -> None:
        self.fixations = []
        self.reports = []

    def on_fixation(self, session, fixation: Fixation) -> None:
        self.fixations.append(fixation)

    def on_drift_status(self, session, report: DriftReport) -> None:
        self.reports.append(report)

    def on_session_complete(self, session, result: VerificationResult) -> None:
        pass

    def transitions(self) -> List[DriftReport]:
        """Reports whose status differs from the one before."""
        out: List[DriftReport] = []
        for report in self.reports:
            if not out or out[-1].status != report.status:
                out.append(report)
        return out

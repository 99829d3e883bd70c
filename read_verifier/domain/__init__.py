"""Domain models for gaze samples, fixations and reading verification."""

from .samples import Fixation, GazeSample, Viewport
from .state import DriftReport, DriftStatus, ReadStatus, RegionReadState
from .report import Verdict, VerificationResult

__all__ = [
    "Fixation",
    "GazeSample",
    "Viewport",
    "DriftReport",
    "DriftStatus",
    "ReadStatus",
    "RegionReadState",
    "Verdict",
    "VerificationResult",
]

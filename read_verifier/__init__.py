"""
Gaze-based reading verification.

Enthält:
- Adaptive Glättung und Ausreißer-Erkennung
- Fixations-Erkennung und Lese-Tracking pro Textregion
- Drift-Überwachung
- Verifikation (Coverage, Verdict)
"""

from .config import SessionConfiguration
from .domain import (
    DriftReport,
    DriftStatus,
    Fixation,
    GazeSample,
    ReadStatus,
    RegionReadState,
    Verdict,
    VerificationResult,
)
from .engine import ReadingSession
from .evaluation.verification import compute_verification, verdict_label
from .regions import Rect, RegionIndex
from .stream import GazeStream

__version__ = "0.1.0"

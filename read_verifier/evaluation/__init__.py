"""Evaluation: verification scoring and visualization."""

from .verification import VERDICT_LABELS, classify_verdict, compute_verification, verdict_label
from .plotting import plot_reading_session

__all__ = [
    "VERDICT_LABELS",
    "classify_verdict",
    "compute_verification",
    "verdict_label",
    "plot_reading_session",
]

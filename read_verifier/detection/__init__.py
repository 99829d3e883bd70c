"""Fixation detection."""

from .fixation import FixationDetector, centroid

__all__ = ["FixationDetector", "centroid"]

"""Region read tracking and drift monitoring."""

from .read_tracker import ReadTracker
from .drift import DriftMonitor, ManualClock, monotonic_ms

__all__ = ["ReadTracker", "DriftMonitor", "ManualClock", "monotonic_ms"]

"""Per-region read state and drift status."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class ReadStatus(Enum):
    """Classification of a document region.

    Only these three states are ever produced; a region that has received a
    fixation below the read threshold is ``PARTIAL``.
    """

    UNREAD = "unread"
    PARTIAL = "partial"
    READ = "read"


@dataclass
class RegionReadState:
    """Accumulated attention for one region (span).

    ``is_read`` is monotonic: once set it stays set for the session.
    """

    total_dwell_time: float
    fixation_count: int
    first_fixation_time: float
    last_fixation_time: float
    is_read: bool = False

    def copy(self) -> "RegionReadState":
        return replace(self)


class DriftStatus(Enum):
    """Health of the upstream gaze estimate."""

    OK = "ok"
    WARNING = "warning"
    LOST = "lost"


@dataclass(frozen=True)
class DriftReport:
    """A drift status together with its user-facing message."""

    status: DriftStatus
    message: str
    checked_at: float

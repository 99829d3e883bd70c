"""Verification verdict and result snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict

from .state import RegionReadState


class Verdict(Enum):
    """Qualitative outcome of a reading session."""

    VERIFIED = "verified"
    PARTIAL = "partial"
    SKIMMED = "skimmed"
    INSUFFICIENT = "insufficient"


@dataclass(frozen=True)
class VerificationResult:
    """Snapshot derived from the read map; never mutated after creation."""

    coverage_percent: float
    average_fixation_duration: float
    total_read_time: float
    pages_read: int
    total_pages: int
    verdict: Verdict
    read_map: Dict[str, RegionReadState] = field(default_factory=dict)
    timestamp: datetime | None = None

    @property
    def read_count(self) -> int:
        return sum(1 for state in self.read_map.values() if state.is_read)

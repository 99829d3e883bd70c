"""Per-region dwell accumulation and read classification."""
from __future__ import annotations

from typing import Container, Dict, Iterator, Optional

from ..config import ReadTrackerConfig
from ..domain.samples import Fixation
from ..domain.state import ReadStatus, RegionReadState


class ReadTracker:
    """Accumulate fixation dwell time per region and mark regions read.

    Regions are keyed by span id; fixations without a target are ignored.
    """

    def __init__(self, config: ReadTrackerConfig | None = None) -> None:
        self.config = config or ReadTrackerConfig()
        self._regions: Dict[str, RegionReadState] = {}

    @property
    def read_threshold(self) -> float:
        return self.config.read_threshold_ms

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._regions)

    def record_fixation(self, fixation: Fixation) -> Optional[RegionReadState]:
        span_id = fixation.target_span_id
        if span_id is None:
            return None

        state = self._regions.get(span_id)
        if state is None:
            state = RegionReadState(
                total_dwell_time=fixation.duration,
                fixation_count=1,
                first_fixation_time=fixation.start_time,
                last_fixation_time=fixation.end_time,
                is_read=fixation.duration >= self.read_threshold,
            )
            self._regions[span_id] = state
            return state

        state.total_dwell_time += fixation.duration
        state.fixation_count += 1
        state.last_fixation_time = fixation.end_time
        state.is_read = state.is_read or state.total_dwell_time >= self.read_threshold
        return state

    def get(self, span_id: str) -> Optional[RegionReadState]:
        return self._regions.get(span_id)

    def status(self, span_id: str) -> ReadStatus:
        state = self._regions.get(span_id)
        if state is None:
            return ReadStatus.UNREAD
        if state.is_read:
            return ReadStatus.READ
        if state.total_dwell_time > 0:
            return ReadStatus.PARTIAL
        return ReadStatus.UNREAD

    def read_count(self, known: Optional[Container[str]] = None) -> int:
        """Number of read regions, restricted to ``known`` ids when given."""
        return sum(
            1
            for span_id, state in self._regions.items()
            if state.is_read and (known is None or span_id in known)
        )

    def coverage_percent(self, total_regions: int, known: Optional[Container[str]] = None) -> float:
        if total_regions <= 0:
            return 0.0
        return min(100.0, 100.0 * self.read_count(known) / total_regions)

    def average_fixation_duration(self) -> float:
        total_dwell = sum(state.total_dwell_time for state in self._regions.values())
        total_fixations = sum(state.fixation_count for state in self._regions.values())
        return 0.0 if total_fixations == 0 else total_dwell / total_fixations

    def snapshot(self) -> Dict[str, RegionReadState]:
        """Copy of the read map, safe to hand to the scorer or the UI."""
        return {span_id: state.copy() for span_id, state in self._regions.items()}

    def reset(self) -> None:
        self._regions.clear()

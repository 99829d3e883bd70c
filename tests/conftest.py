from typing import Iterable, List, Tuple

import pytest

from read_verifier.domain.samples import GazeSample
from read_verifier.regions import Rect, RegionIndex
from read_verifier.tracking import ManualClock


def build_samples(points: Iterable[Tuple[float, float, float]]) -> List[GazeSample]:
    """Build samples from ``(x, y, time_ms)`` tuples."""
    return [GazeSample(x=float(x), y=float(y), timestamp=float(t)) for x, y, t in points]


def steady_gaze(x: float, y: float, start_ms: float, end_ms: float, step_ms: float = 20.0) -> List[GazeSample]:
    """Samples jittering by one pixel around ``(x, y)``."""
    samples = []
    t = start_ms
    i = 0
    while t <= end_ms:
        jitter = 1.0 if i % 2 else -1.0
        samples.append(GazeSample(x + jitter, y - jitter, t))
        t += step_ms
        i += 1
    return samples


@pytest.fixture
def two_span_regions() -> RegionIndex:
    """One page with two text lines stacked vertically."""
    regions = RegionIndex()
    regions.register_page(
        0,
        [
            ("First line of text", Rect(0.0, 50.0, 400.0, 100.0)),
            ("Second line of text", Rect(0.0, 300.0, 400.0, 100.0)),
        ],
    )
    return regions


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(0.0)

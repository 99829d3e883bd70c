"""Sample-level filters: adaptive smoothing and outlier rejection."""

from .one_euro import GazeFilter, LowPassFilter, OneEuroFilter, smoothing_alpha
from .outlier import OutlierRejector

__all__ = [
    "GazeFilter",
    "LowPassFilter",
    "OneEuroFilter",
    "smoothing_alpha",
    "OutlierRejector",
]

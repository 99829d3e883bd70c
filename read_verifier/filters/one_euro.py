"""Adaptive low-pass smoothing (One Euro filter).

The cutoff frequency grows with the estimated speed of the signal: slow
drift around a fixation is smoothed heavily while saccades pass with
little lag. Two independent instances smooth the x and y axes.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

from ..config import SmoothingConfig


def smoothing_alpha(cutoff: float, frequency: float) -> float:
    """Exponential smoothing factor for ``cutoff`` Hz at ``frequency`` Hz."""
    te = 1.0 / frequency
    tau = 1.0 / (2.0 * math.pi * cutoff)
    return 1.0 / (1.0 + tau / te)


class LowPassFilter:
    """First-order exponential smoother; the first value seeds the state."""

    def __init__(self) -> None:
        self._last: Optional[float] = None

    def filter(self, value: float, alpha: float) -> float:
        if self._last is None:
            self._last = value
        else:
            self._last = alpha * value + (1.0 - alpha) * self._last
        return self._last

    def last_value(self) -> Optional[float]:
        return self._last

    def reset(self) -> None:
        self._last = None


class OneEuroFilter:
    """One Euro filter for a single axis."""

    def __init__(self, config: SmoothingConfig | None = None) -> None:
        self.config = config or SmoothingConfig()
        self.frequency = self.config.frequency_hz
        self._x = LowPassFilter()
        self._dx = LowPassFilter()
        self._last_time: Optional[float] = None

    def filter(self, value: float, timestamp: Optional[float] = None) -> float:
        cfg = self.config
        if self._last_time is not None and timestamp is not None:
            dt = timestamp - self._last_time
            # Keep the previous rate on duplicate timestamps
            if dt > 0:
                self.frequency = 1000.0 / dt
        self._last_time = timestamp

        previous = self._x.last_value()
        dx = 0.0 if previous is None else (value - previous) * self.frequency
        edx = self._dx.filter(dx, smoothing_alpha(cfg.d_cutoff, self.frequency))
        cutoff = cfg.min_cutoff + cfg.beta * abs(edx)
        return self._x.filter(value, smoothing_alpha(cutoff, self.frequency))

    def reset(self) -> None:
        self._x.reset()
        self._dx.reset()
        self._last_time = None
        self.frequency = self.config.frequency_hz


class GazeFilter:
    """Pair of One Euro filters smoothing both screen axes."""

    def __init__(self, config: SmoothingConfig | None = None) -> None:
        self.config = config or SmoothingConfig()
        self.x_filter = OneEuroFilter(self.config)
        self.y_filter = OneEuroFilter(self.config)

    def filter(self, x: float, y: float, timestamp: float) -> Tuple[float, float]:
        return self.x_filter.filter(x, timestamp), self.y_filter.filter(y, timestamp)

    def reset(self) -> None:
        self.x_filter.reset()
        self.y_filter.reset()

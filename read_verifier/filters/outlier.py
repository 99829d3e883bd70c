"""Z-score outlier rejection over the recently accepted samples."""
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Tuple

import numpy as np

from ..config import OutlierConfig
from ..domain.samples import GazeSample

logger = logging.getLogger(__name__)


class OutlierRejector:
    """Drop samples that jump implausibly far from the recent distribution.

    Only accepted samples enter the window, so a burst of bad readings
    cannot shift the baseline and mask further outliers.
    """

    def __init__(self, config: OutlierConfig | None = None) -> None:
        self.config = config or OutlierConfig()
        self._window: Deque[GazeSample] = deque(maxlen=self.config.window_size)

    def __len__(self) -> int:
        return len(self._window)

    def statistics(self) -> Tuple[float, float, float, float]:
        """Return ``(mean_x, mean_y, std_x, std_y)`` of the window (population std)."""
        if not self._window:
            return 0.0, 0.0, 0.0, 0.0
        coords = np.array([(s.x, s.y) for s in self._window], dtype=float)
        mean = coords.mean(axis=0)
        std = coords.std(axis=0)
        return float(mean[0]), float(mean[1]), float(std[0]), float(std[1])

    def is_outlier(self, sample: GazeSample) -> bool:
        """Screen ``sample``; accepted samples are added to the window."""
        cfg = self.config
        if len(self._window) < cfg.warmup_samples:
            self._window.append(sample)
            return False

        mean_x, mean_y, std_x, std_y = self.statistics()
        std_x = max(std_x, cfg.min_std_px)
        std_y = max(std_y, cfg.min_std_px)

        z_x = abs(sample.x - mean_x) / std_x
        z_y = abs(sample.y - mean_y) / std_y
        if z_x > cfg.z_threshold or z_y > cfg.z_threshold:
            logger.debug("Rejected outlier at (%.1f, %.1f): z=(%.2f, %.2f)", sample.x, sample.y, z_x, z_y)
            return True

        self._window.append(sample)
        return False

    def accept(self, sample: GazeSample) -> bool:
        return not self.is_outlier(sample)

    def reset(self) -> None:
        self._window.clear()

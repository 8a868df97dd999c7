"""Period estimation from a sum-of-absolute-differences scan."""

from typing import Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..logger import get_logger

logger = get_logger(__name__)


class PeriodEstimator:
    """Finds the period of a monophonic signal in samples.

    The difference function of the window against lagged copies of itself is
    zero at lag 0, climbs to a peak half a period later and falls back toward
    zero one full period in. The estimate is the first trough that follows a
    rise and drops below ``trough_ratio`` of the largest difference seen so
    far, found in a single forward pass.
    """

    def __init__(self, trough_ratio: float = 0.1):
        if not 0.0 < trough_ratio < 1.0:
            raise ValueError(f"trough_ratio must be in (0, 1), got {trough_ratio}")
        self.trough_ratio = trough_ratio

    @staticmethod
    def difference_function(samples: np.ndarray) -> np.ndarray:
        """Sum of absolute differences for every lag in ``[0, len(samples) // 2)``.

        Args:
            samples: 1D array of integer samples

        Returns:
            np.ndarray: ``diff[i] = sum(|s[j] - s[i + j]|)`` for ``j < len // 2``
        """
        x = np.asarray(samples, dtype=np.int64)
        half = len(x) // 2
        if half == 0:
            return np.zeros(0, dtype=np.int64)

        # Row i is the window shifted by lag i
        lagged = sliding_window_view(x, half)[:half]
        return np.abs(lagged - x[:half]).sum(axis=1)

    def estimate(self, samples: np.ndarray) -> Optional[int]:
        """Estimate the period of ``samples``.

        Args:
            samples: 1D array of integer samples

        Returns:
            The period in samples, or None if no qualifying trough was found
        """
        diffs = self.difference_function(samples)

        prev_diff = 0.0
        prev_dx = 0.0
        max_diff = 0.0
        for i, diff in enumerate(diffs.tolist()):
            dx = prev_diff - diff
            # dx turning from falling to rising marks a trough at i - 1
            if dx < 0 and prev_dx > 0 and diff < self.trough_ratio * max_diff:
                logger.debug(
                    f"Trough at lag {i - 1}: diff={diff}, peak={max_diff}"
                )
                return i - 1
            prev_dx = dx
            prev_diff = diff
            max_diff = max(diff, max_diff)

        logger.debug(f"No period found in {len(diffs)} lags (peak={max_diff})")
        return None

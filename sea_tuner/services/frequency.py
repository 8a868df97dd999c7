#!/usr/bin/env python3

import numpy as np
from typing import ClassVar, TypeAlias

from ..logger import get_logger

logger = get_logger(__name__)


class FrequencyNormalizer:
    # Type aliases
    Frequency: TypeAlias = float

    # E2, the lowest matchable table note
    OCTAVE_FLOOR: ClassVar[Frequency] = 82.41
    # Exactly one octave up, so doubling and halving always land in range
    OCTAVE_CEILING: ClassVar[Frequency] = 2 * OCTAVE_FLOOR

    def to_frequency(self, period: int, sample_rate: float) -> Frequency:
        """Convert a period in samples to a frequency in Hz.

        Args:
            period: Period length in samples
            sample_rate: Sample rate of the analysed audio in Hz

        Returns:
            float: The frequency in Hz

        Raises:
            ValueError: If period or sample rate is not positive
        """
        if period <= 0:
            raise ValueError(f"Period must be positive, got {period}")
        if sample_rate <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate}")
        return sample_rate / period

    def normalize(self, frequency: Frequency) -> Frequency:
        """Fold a frequency into ``[OCTAVE_FLOOR, OCTAVE_CEILING)`` by octaves.

        Args:
            frequency: Any positive frequency in Hz

        Returns:
            float: The same pitch class inside the reference octave

        Raises:
            ValueError: If frequency is not a positive finite number
        """
        if not np.isfinite(frequency) or frequency <= 0:
            raise ValueError(f"Cannot normalize frequency {frequency}")

        hz = float(frequency)
        while hz < self.OCTAVE_FLOOR:
            hz *= 2
        while hz >= self.OCTAVE_CEILING:
            hz *= 0.5

        if hz != frequency:
            logger.debug(f"Normalized {frequency:.2f}Hz to {hz:.2f}Hz")
        return hz

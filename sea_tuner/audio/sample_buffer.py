"""Decoding of raw PCM bytes into the analysis window."""

import numpy as np
from typing import ClassVar

from ..logger import get_logger

logger = get_logger(__name__)


class SampleBuffer:
    """Fixed-size window of signed 16-bit mono samples, reused across cycles."""

    # Samples per analysis window
    DEFAULT_SIZE: ClassVar[int] = 1200
    # Little-endian signed 16-bit PCM
    DTYPE: ClassVar[np.dtype] = np.dtype("<i2")

    def __init__(self, size: int = DEFAULT_SIZE) -> None:
        if size <= 0:
            raise ValueError(f"Window size must be positive, got {size}")
        self._samples = np.zeros(size, dtype=np.int32)

    @property
    def size(self) -> int:
        return len(self._samples)

    @property
    def byte_length(self) -> int:
        """Number of bytes that fill the window exactly."""
        return self.size * self.DTYPE.itemsize

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    def fill(self, data: bytes) -> int:
        """Decode ``data`` into the front of the window.

        Only complete sample pairs are decoded and anything beyond the window
        is ignored. Samples after a short read keep their previous values.

        Args:
            data: Raw little-endian 16-bit PCM bytes

        Returns:
            int: Number of samples decoded, 0 meaning no new data
        """
        count = min(len(data) // self.DTYPE.itemsize, self.size)
        if count <= 0:
            return 0

        decoded = np.frombuffer(data, dtype=self.DTYPE, count=count)
        self._samples[:count] = decoded
        if count < self.size:
            logger.debug(f"Short read: decoded {count} of {self.size} samples")
        return count

"""Pull-based audio sources feeding the tuner loop.

Every source delivers mono, signed 16-bit little-endian PCM through
``read(buffer, offset, length)``. A positive return is the number of bytes
written, 0 means nothing arrived this cycle and -1 means the stream is over.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import soundfile as sf

from ..errors import ConfigurationError
from ..logger import get_logger

logger = get_logger(__name__)

END_OF_STREAM = -1


class AudioSource(ABC):
    """Abstract base class for audio sources."""

    @abstractmethod
    def open(self) -> None:
        """Acquire the underlying device or file."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying device or file."""
        pass

    @abstractmethod
    def read(self, buffer: bytearray, offset: int, length: int) -> int:
        """Read up to ``length`` bytes into ``buffer`` starting at ``offset``.

        Returns:
            Bytes read, 0 if none are available, or -1 at end of stream
        """
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the audio stream."""
        pass

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once the source will never deliver data again."""
        pass

    def __enter__(self) -> AudioSource:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def store_samples(buffer: bytearray, offset: int, length: int, data: bytes) -> int:
    """Copy at most ``length`` whole sample pairs of ``data`` into ``buffer``."""
    count = min(len(data), length, len(buffer) - offset)
    count -= count % 2
    buffer[offset : offset + count] = data[:count]
    return count


class WavFileAudioSource(AudioSource):
    """Reads audio from a sound file, mixing multi-channel audio down to mono."""

    def __init__(self, file_path: str) -> None:
        self._file_path = file_path
        self._file: Optional[sf.SoundFile] = None
        self._closed = False

        try:
            info = sf.info(self._file_path)
        except RuntimeError as e:
            raise ConfigurationError(f"Cannot read audio file {file_path}: {e}") from e
        self._sample_rate = info.samplerate
        self._channels = info.channels

    def open(self) -> None:
        if self._file is None:
            self._file = sf.SoundFile(self._file_path)
            self._closed = False
            logger.info(
                f"Opened {self._file_path}: {self._sample_rate}Hz, {self._channels} channel(s)"
            )

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        self._closed = True

    def read(self, buffer: bytearray, offset: int, length: int) -> int:
        if self._file is None or self._closed:
            return END_OF_STREAM

        data = self._file.read(length // 2, dtype="int16", always_2d=True)
        if len(data) == 0:
            self._closed = True
            return END_OF_STREAM

        if data.shape[1] > 1:
            mono = data.mean(axis=1).astype("<i2")
        else:
            mono = data[:, 0].astype("<i2")
        return store_samples(buffer, offset, length, mono.tobytes())

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def closed(self) -> bool:
        return self._closed


class MemoryAudioSource(AudioSource):
    """Serves a fixed block of PCM bytes, ``chunk_size`` bytes per read."""

    def __init__(
        self, data: bytes, sample_rate: int = 44100, chunk_size: Optional[int] = None
    ) -> None:
        # Each read must be able to carry at least one whole sample
        if chunk_size is not None and chunk_size < 2:
            raise ValueError(f"chunk_size must be at least 2 bytes, got {chunk_size}")

        self._data = bytes(data)
        self._sample_rate = sample_rate
        self._chunk_size = chunk_size
        self._position = 0
        self._closed = False

    def open(self) -> None:
        pass

    def close(self) -> None:
        self._closed = True

    def read(self, buffer: bytearray, offset: int, length: int) -> int:
        # A trailing odd byte never forms a sample
        if self._closed or len(self._data) - self._position < 2:
            self._closed = True
            return END_OF_STREAM

        if self._chunk_size is not None:
            length = min(length, self._chunk_size)
        count = store_samples(
            buffer, offset, length, self._data[self._position : self._position + length]
        )
        self._position += count
        return count

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def closed(self) -> bool:
        return self._closed

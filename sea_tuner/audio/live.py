"""Live audio input through sounddevice."""

from __future__ import annotations

from typing import ClassVar, Optional

import sounddevice as sd

from ..errors import ConfigurationError, DeviceUnavailableError
from ..logger import get_logger
from .sources import END_OF_STREAM, AudioSource, store_samples

logger = get_logger(__name__)


class LiveAudioSource(AudioSource):
    """Reads live audio from an input device using sounddevice."""

    SAMPLE_RATE: ClassVar[int] = 44100  # Hz
    CHANNELS: ClassVar[int] = 1  # Mono audio
    DTYPE: ClassVar[str] = "int16"

    def __init__(
        self, device_id: Optional[int] = None, sample_rate: Optional[int] = None
    ) -> None:
        """Initialize the live source.

        Args:
            device_id: Audio input device ID, or None for the default input
            sample_rate: Sample rate in Hz, or None for the default (44100)
        """
        self._device_id = device_id
        self._sample_rate = sample_rate or self.SAMPLE_RATE
        self._stream: Optional[sd.RawInputStream] = None
        self._closed = False

    def open(self) -> None:
        if self._stream is not None:
            return

        try:
            sd.query_devices(self._device_id, "input")
        except (ValueError, sd.PortAudioError) as e:
            raise DeviceUnavailableError(
                f"Input device {self._device_id} is unavailable: {e}"
            ) from e

        try:
            sd.check_input_settings(
                device=self._device_id,
                channels=self.CHANNELS,
                dtype=self.DTYPE,
                samplerate=self._sample_rate,
            )
        except sd.PortAudioError as e:
            raise ConfigurationError(
                f"Input device {self._device_id} does not support "
                f"{self._sample_rate}Hz mono {self.DTYPE}: {e}"
            ) from e

        try:
            self._stream = sd.RawInputStream(
                device=self._device_id,
                channels=self.CHANNELS,
                samplerate=self._sample_rate,
                dtype=self.DTYPE,
            )
            self._stream.start()
        except sd.PortAudioError as e:
            self._stream = None
            raise DeviceUnavailableError(
                f"Could not open input device {self._device_id}: {e}"
            ) from e

        self._closed = False
        logger.info(
            f"Audio input opened: device={self._device_id}, rate={self._sample_rate}Hz"
        )

    def close(self) -> None:
        if self._stream:
            self._stream.stop()
            self._stream.close()
            self._stream = None
            logger.info("Audio input closed")
        self._closed = True

    def read(self, buffer: bytearray, offset: int, length: int) -> int:
        if self._stream is None or self._closed:
            return END_OF_STREAM

        frames = length // 2
        if frames <= 0:
            return 0

        # Blocks until the requested frames have been captured
        data, overflowed = self._stream.read(frames)
        if overflowed:
            logger.debug("Input overflow, some samples were dropped")
        return store_samples(buffer, offset, length, bytes(data))

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def closed(self) -> bool:
        return self._closed


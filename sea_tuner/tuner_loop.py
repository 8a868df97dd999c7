"""The acquire, analyse and publish cycle of the tuner."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Optional

import numpy as np

from .audio.sample_buffer import SampleBuffer
from .audio.sources import AudioSource
from .core.events import TunerEvents
from .detection.period_estimator import PeriodEstimator
from .logger import get_logger
from .note_matcher import NoteMatcher
from .note_types import PLACEHOLDER_RESULT, DetectionResult
from .services.frequency import FrequencyNormalizer

logger = get_logger(__name__)


class TunerPhase(Enum):
    """Where the loop is within a cycle."""

    AWAITING_DATA = auto()
    ANALYZING = auto()
    PUBLISHING = auto()
    IDLE_RETAIN = auto()


@dataclass(frozen=True)
class TunerState:
    """State carried from one cycle to the next.

    ``result`` is the last good detection; it only changes when a window
    yields a usable period.
    """

    result: DetectionResult = PLACEHOLDER_RESULT
    phase: TunerPhase = TunerPhase.AWAITING_DATA


class TunerLoop:
    """Repeatedly reads a window from an audio source and publishes the note."""

    DEFAULT_CYCLE_DELAY = 0.01  # seconds

    def __init__(
        self,
        source: AudioSource,
        window_size: int = SampleBuffer.DEFAULT_SIZE,
        cycle_delay: float = DEFAULT_CYCLE_DELAY,
        estimator: Optional[PeriodEstimator] = None,
        normalizer: Optional[FrequencyNormalizer] = None,
        matcher: Optional[NoteMatcher] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the loop.

        Args:
            source: Opened audio source delivering mono 16-bit PCM
            window_size: Samples per analysis window
            cycle_delay: Pause between cycles in seconds
            estimator: Period estimator, or None for the default
            normalizer: Frequency normalizer, or None for the default
            matcher: Note matcher, or None for the default table
            sleep: Function used to pause between cycles
        """
        if cycle_delay < 0:
            raise ValueError(f"cycle_delay must not be negative, got {cycle_delay}")

        self._source = source
        self._buffer = SampleBuffer(window_size)
        self._cycle_delay = cycle_delay
        self._estimator = estimator or PeriodEstimator()
        self._normalizer = normalizer or FrequencyNormalizer()
        self._matcher = matcher or NoteMatcher()
        self._sleep = sleep

        self.events = TunerEvents()
        self._lock = threading.Lock()
        self._state = TunerState()
        self._running = False

    @property
    def sample_rate(self) -> int:
        return self._source.sample_rate

    @property
    def is_running(self) -> bool:
        return self._running

    def snapshot(self) -> DetectionResult:
        """The most recently published result, safe to call from any thread."""
        with self._lock:
            return self._state.result

    def analyze(self, samples: np.ndarray) -> Optional[DetectionResult]:
        """Run one window through estimation, normalization and matching.

        Returns:
            The detection, or None if the window has no usable period
        """
        period = self._estimator.estimate(samples)
        if period is None:
            return None

        frequency = self._normalizer.to_frequency(period, self.sample_rate)
        normalized = self._normalizer.normalize(frequency)
        match = self._matcher.match(normalized)
        return DetectionResult(
            label=match.note.label,
            previous_label=match.previous.label,
            next_label=match.next.label,
            frequency=frequency,
            normalized_frequency=normalized,
            offset=int(match.offset),
        )

    def step(self, state: TunerState, data: bytes) -> TunerState:
        """Advance ``state`` by one window of raw PCM bytes.

        Args:
            state: State from the previous cycle
            data: Bytes read from the source this cycle

        Returns:
            The new state; its result is unchanged unless a period was found
        """
        if self._buffer.fill(data) == 0:
            return replace(state, phase=TunerPhase.IDLE_RETAIN)

        state = replace(state, phase=TunerPhase.ANALYZING)
        result = self.analyze(self._buffer.samples)
        if result is None:
            logger.debug(f"No period found, keeping {state.result.label}")
            return replace(state, phase=TunerPhase.IDLE_RETAIN)

        return TunerState(result=result, phase=TunerPhase.PUBLISHING)

    def run(self, state: Optional[TunerState] = None) -> TunerState:
        """Run cycles until the source closes or ``stop`` is called.

        Args:
            state: Starting state, or None to start from the placeholder

        Returns:
            The state after the last cycle
        """
        state = state or TunerState()
        self._set_state(state)
        raw = bytearray(self._buffer.byte_length)
        self._running = True
        logger.info(
            f"Tuner loop started: {self._buffer.size} samples at {self.sample_rate}Hz"
        )

        try:
            while self._running:
                state = replace(state, phase=TunerPhase.AWAITING_DATA)
                bytes_read = self._source.read(raw, 0, len(raw))

                if bytes_read < 0 or (bytes_read == 0 and self._source.closed):
                    logger.info("Audio stream closed, stopping tuner loop")
                    self.events.emit_stream_closed()
                    break

                if bytes_read == 0:
                    logger.debug("No new audio data this cycle")
                    state = replace(state, phase=TunerPhase.IDLE_RETAIN)
                else:
                    state = self.step(state, bytes(raw[:bytes_read]))
                    self._set_state(state)
                    self.events.emit_result(state.result)

                self._pause()
        finally:
            self._running = False

        return state

    def stop(self) -> None:
        """Ask the loop to exit after the current cycle."""
        self._running = False

    def _set_state(self, state: TunerState) -> None:
        with self._lock:
            self._state = state

    def _pause(self) -> None:
        try:
            self._sleep(self._cycle_delay)
        except Exception as e:
            logger.debug(f"Ignoring error during cycle delay: {e}")

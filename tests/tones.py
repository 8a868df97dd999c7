"""Synthetic test signals."""

import numpy as np

SAMPLE_RATE = 44100


def sine_samples(frequency, count, sample_rate=SAMPLE_RATE, amplitude=10000):
    """A pure tone as int16 samples."""
    t = np.arange(count) / sample_rate
    return np.round(amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.int16)


def sine_bytes(frequency, count, sample_rate=SAMPLE_RATE, amplitude=10000):
    """A pure tone as little-endian 16-bit PCM bytes."""
    return sine_samples(frequency, count, sample_rate, amplitude).astype("<i2").tobytes()


def silence_bytes(count):
    return bytes(2 * count)

"""Audio device utilities for the tuner."""

from typing import Any, Dict, List, Sequence

import sounddevice as sd

from ..logger import get_logger

logger = get_logger(__name__)

# Sample rates probed when listing devices
COMMON_SAMPLE_RATES: Sequence[int] = (8000, 16000, 22050, 44100, 48000, 96000)


def supported_sample_rates(
    device_id: int, rates: Sequence[int] = COMMON_SAMPLE_RATES
) -> List[int]:
    """Return the rates from ``rates`` that the device accepts for mono int16 input."""
    supported = []
    for rate in rates:
        try:
            sd.check_input_settings(
                device=device_id, samplerate=rate, channels=1, dtype="int16"
            )
            supported.append(rate)
        except Exception as e:
            logger.debug(f"Device {device_id}: {rate} Hz not supported ({e})")
    return supported


def list_input_devices() -> List[Dict[str, Any]]:
    """Describe every device that can capture audio.

    Returns:
        A list of dicts with ``id``, ``name``, ``default_samplerate`` and
        ``sample_rates`` (the supported subset of COMMON_SAMPLE_RATES)
    """
    devices = []
    for device_id, device in enumerate(sd.query_devices()):
        if device["max_input_channels"] <= 0:
            continue
        devices.append(
            {
                "id": device_id,
                "name": device["name"],
                "default_samplerate": device["default_samplerate"],
                "sample_rates": supported_sample_rates(device_id),
            }
        )
    return devices


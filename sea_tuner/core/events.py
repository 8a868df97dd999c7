"""Event system connecting the tuner loop to its displays."""

from typing import Callable, Dict, List
from enum import Enum, auto

from ..logger import get_logger
from ..note_types import DetectionResult

logger = get_logger(__name__)


class TunerEventType(Enum):
    """Event types emitted by the tuner loop."""

    RESULT_PUBLISHED = auto()
    STREAM_CLOSED = auto()


class TunerEvents:
    """Synchronous fan-out of tuner results to the displays listening for them.

    Listeners run on the loop's thread. A listener that raises is logged and
    skipped so one broken display cannot stall the tuner.
    """

    def __init__(self):
        self._listeners: Dict[TunerEventType, List[Callable]] = {
            event_type: [] for event_type in TunerEventType
        }

    def subscribe(self, event_type: TunerEventType, callback: Callable) -> None:
        """Register a callback once for an event type."""
        listeners = self._listeners[event_type]
        if callback not in listeners:
            listeners.append(callback)
            logger.debug(f"Added listener for {event_type.name}")

    def on_result(self, callback: Callable[[DetectionResult], None]) -> None:
        """Register ``callback(result)`` for every published DetectionResult."""
        self.subscribe(TunerEventType.RESULT_PUBLISHED, callback)

    def on_stream_closed(self, callback: Callable[[], None]) -> None:
        """Register ``callback()`` for the end of the audio stream."""
        self.subscribe(TunerEventType.STREAM_CLOSED, callback)

    def publish(self, event_type: TunerEventType, *args) -> None:
        for callback in self._listeners[event_type]:
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in {event_type.name} listener {callback!r}: {e}")

    def emit_result(self, result: DetectionResult) -> None:
        self.publish(TunerEventType.RESULT_PUBLISHED, result)

    def emit_stream_closed(self) -> None:
        self.publish(TunerEventType.STREAM_CLOSED)

    def clear(self) -> None:
        """Remove all event listeners."""
        for listeners in self._listeners.values():
            listeners.clear()
        logger.debug("Cleared all event listeners")

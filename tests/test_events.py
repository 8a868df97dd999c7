import unittest

from sea_tuner.core.events import TunerEvents, TunerEventType
from sea_tuner.note_types import PLACEHOLDER_RESULT


class TestTunerEvents(unittest.TestCase):
    def test_listener_registered_once(self):
        events = TunerEvents()
        received = []
        events.on_result(received.append)
        events.on_result(received.append)
        events.emit_result(PLACEHOLDER_RESULT)
        self.assertEqual(received, [PLACEHOLDER_RESULT])

    def test_failing_listener_does_not_block_others(self):
        events = TunerEvents()
        received = []

        def broken(result):
            raise RuntimeError("display gone")

        events.on_result(broken)
        events.on_result(received.append)
        with self.assertLogs("sea_tuner.core.events", level="ERROR"):
            events.emit_result(PLACEHOLDER_RESULT)
        self.assertEqual(received, [PLACEHOLDER_RESULT])

    def test_events_are_kept_apart(self):
        events = TunerEvents()
        results, closed = [], []
        events.on_result(results.append)
        events.on_stream_closed(lambda: closed.append(True))
        events.emit_stream_closed()
        self.assertEqual(results, [])
        self.assertEqual(closed, [True])

    def test_clear_removes_listeners(self):
        events = TunerEvents()
        received = []
        events.on_stream_closed(lambda: received.append("closed"))
        events.clear()
        events.emit_stream_closed()
        self.assertEqual(received, [])

    def test_publish_without_listeners(self):
        TunerEvents().publish(TunerEventType.STREAM_CLOSED)


if __name__ == "__main__":
    unittest.main()

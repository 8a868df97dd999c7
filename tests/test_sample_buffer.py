import unittest

import numpy as np

from sea_tuner.audio.sample_buffer import SampleBuffer


class TestSampleBuffer(unittest.TestCase):
    def test_decodes_little_endian_signed_pairs(self):
        buffer = SampleBuffer(4)
        data = bytes([0x01, 0x00, 0xFF, 0xFF, 0xFF, 0x7F, 0x00, 0x80])
        self.assertEqual(buffer.fill(data), 4)
        self.assertEqual(buffer.samples.tolist(), [1, -1, 32767, -32768])

    def test_byte_length_is_two_bytes_per_sample(self):
        self.assertEqual(SampleBuffer(1200).byte_length, 2400)
        self.assertEqual(SampleBuffer().size, 1200)

    def test_trailing_odd_byte_is_ignored(self):
        buffer = SampleBuffer(4)
        self.assertEqual(buffer.fill(bytes([0x02, 0x00, 0x03, 0x00, 0x7F])), 2)
        self.assertEqual(buffer.samples[:2].tolist(), [2, 3])

    def test_empty_data_decodes_nothing(self):
        buffer = SampleBuffer(4)
        self.assertEqual(buffer.fill(b""), 0)
        self.assertEqual(buffer.fill(b"\x01"), 0)
        self.assertEqual(buffer.samples.tolist(), [0, 0, 0, 0])

    def test_data_beyond_window_is_ignored(self):
        buffer = SampleBuffer(2)
        data = np.array([5, 6, 7, 8], dtype="<i2").tobytes()
        self.assertEqual(buffer.fill(data), 2)
        self.assertEqual(buffer.samples.tolist(), [5, 6])

    def test_short_read_keeps_previous_tail(self):
        buffer = SampleBuffer(4)
        buffer.fill(np.array([1, 2, 3, 4], dtype="<i2").tobytes())
        buffer.fill(np.array([9], dtype="<i2").tobytes())
        self.assertEqual(buffer.samples.tolist(), [9, 2, 3, 4])

    def test_rejects_empty_window(self):
        with self.assertRaises(ValueError):
            SampleBuffer(0)


if __name__ == "__main__":
    unittest.main()

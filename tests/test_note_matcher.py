import unittest

import numpy as np

from sea_tuner.note_matcher import HALF_RANGE, NOTE_TABLE, NoteMatcher
from sea_tuner.note_types import NoteEntry
from sea_tuner.services.frequency import FrequencyNormalizer


class TestNoteTable(unittest.TestCase):
    def test_table_is_strictly_descending(self):
        frequencies = [entry.frequency for entry in NOTE_TABLE]
        self.assertEqual(len(frequencies), 15)
        self.assertEqual(frequencies, sorted(frequencies, reverse=True))
        self.assertEqual(len(set(frequencies)), 15)

    def test_every_normalized_frequency_has_both_neighbours(self):
        matcher = NoteMatcher()
        for frequency in np.linspace(
            FrequencyNormalizer.OCTAVE_FLOOR, FrequencyNormalizer.OCTAVE_CEILING, 2000, endpoint=False
        ):
            index = matcher.closest_index(float(frequency))
            self.assertGreater(index, 0)
            self.assertLess(index, len(NOTE_TABLE) - 1)


class TestNoteMatcher(unittest.TestCase):
    def setUp(self):
        self.matcher = NoteMatcher()

    def test_exact_table_frequency_has_zero_offset(self):
        for entry in NOTE_TABLE[1:-1]:
            match = self.matcher.match(entry.frequency)
            self.assertEqual(match.note, entry)
            self.assertEqual(match.offset, 0)

    def test_neighbours_of_a(self):
        match = self.matcher.match(110.0)
        self.assertEqual(match.note.label, "A")
        self.assertEqual(match.previous.label, "G#")
        self.assertEqual(match.next.label, "A#")
        self.assertEqual(match.index, 8)

    def test_flat_is_negative_sharp_is_positive(self):
        self.assertLess(self.matcher.match(109.0).offset, 0)
        self.assertGreater(self.matcher.match(111.0).offset, 0)

    def test_offset_reaches_half_range_at_the_neighbour(self):
        index = self.matcher.closest_index(110.0)
        self.assertAlmostEqual(self.matcher.interpolate(103.83, index), -HALF_RANGE)
        self.assertAlmostEqual(self.matcher.interpolate(116.54, index), HALF_RANGE)

    def test_offset_near_midpoint_approaches_half_of_half_range(self):
        midpoint = (110.0 + 116.54) / 2
        below = self.matcher.match(midpoint - 1e-6)
        above = self.matcher.match(midpoint + 1e-6)
        self.assertEqual(below.note.label, "A")
        self.assertEqual(above.note.label, "A#")
        self.assertAlmostEqual(below.offset, HALF_RANGE / 2, places=3)
        self.assertAlmostEqual(above.offset, -HALF_RANGE / 2, places=3)

    def test_offset_stays_in_range(self):
        for frequency in np.linspace(82.41, 164.81, 500):
            offset = self.matcher.match(float(frequency)).offset
            self.assertLessEqual(abs(offset), HALF_RANGE)

    def test_ties_go_to_the_higher_note(self):
        table = [NoteEntry(4.0, "a"), NoteEntry(3.0, "b"), NoteEntry(2.0, "c"), NoteEntry(1.0, "d")]
        matcher = NoteMatcher(table)
        self.assertEqual(matcher.closest_index(2.5), 1)

    def test_custom_half_range(self):
        matcher = NoteMatcher(half_range=50)
        self.assertAlmostEqual(matcher.interpolate(116.54, 8), 50)

    def test_sentinels_are_not_matchable(self):
        with self.assertRaises(ValueError):
            self.matcher.match(200.0)
        with self.assertRaises(ValueError):
            self.matcher.match(70.0)

    def test_rejects_bad_tables(self):
        with self.assertRaises(ValueError):
            NoteMatcher([NoteEntry(2.0, "a"), NoteEntry(1.0, "b")])
        with self.assertRaises(ValueError):
            NoteMatcher([NoteEntry(1.0, "a"), NoteEntry(2.0, "b"), NoteEntry(3.0, "c")])
        with self.assertRaises(ValueError):
            NoteMatcher(half_range=0)


if __name__ == "__main__":
    unittest.main()

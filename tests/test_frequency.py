import math
import unittest

import pytest

from sea_tuner.services.frequency import FrequencyNormalizer


class TestFrequencyNormalizer(unittest.TestCase):
    def setUp(self):
        self.normalizer = FrequencyNormalizer()

    def test_period_to_frequency(self):
        self.assertAlmostEqual(self.normalizer.to_frequency(401, 44100), 109.975, places=3)
        self.assertEqual(self.normalizer.to_frequency(100, 44100), 441.0)

    def test_period_must_be_positive(self):
        with self.assertRaises(ValueError):
            self.normalizer.to_frequency(0, 44100)
        with self.assertRaises(ValueError):
            self.normalizer.to_frequency(-3, 44100)
        with self.assertRaises(ValueError):
            self.normalizer.to_frequency(100, 0)

    def test_octaves_of_a_fold_to_110(self):
        for frequency in (13.75, 27.5, 55.0, 110.0, 220.0, 440.0, 880.0, 3520.0):
            self.assertEqual(self.normalizer.normalize(frequency), 110.0)

    def test_already_normalized_is_unchanged(self):
        for frequency in (82.41, 90.0, 110.0, 123.47, 164.81):
            self.assertEqual(self.normalizer.normalize(frequency), frequency)

    def test_band_is_exactly_one_octave(self):
        self.assertEqual(
            FrequencyNormalizer.OCTAVE_CEILING, 2 * FrequencyNormalizer.OCTAVE_FLOOR
        )
        self.assertEqual(self.normalizer.normalize(164.82), 82.41)

    def test_rejects_unusable_input(self):
        for frequency in (0.0, -110.0, float("inf"), float("nan")):
            with self.assertRaises(ValueError):
                self.normalizer.normalize(frequency)


@pytest.mark.parametrize(
    "frequency", [0.001, 1.0, 41.2, 82.4, 164.8, 164.815, 329.63, 1234.5, 1e6]
)
def test_normalize_lands_in_band_by_whole_octaves(frequency):
    normalizer = FrequencyNormalizer()
    result = normalizer.normalize(frequency)
    assert FrequencyNormalizer.OCTAVE_FLOOR <= result < FrequencyNormalizer.OCTAVE_CEILING
    octaves = math.log2(result / frequency)
    assert octaves == pytest.approx(round(octaves))
    assert normalizer.normalize(result) == result

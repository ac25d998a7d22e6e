"""
Unit tests for calculations/probability.py

Tests the weighted viewing probability, its factor scores and the daylight gate.
"""

import unittest
from dataclasses import replace
from datetime import UTC, datetime

from aurora_decision.api.calculations.probability import (
    PROBABILITY_WEIGHTS,
    AuroraInputs,
    calculate_aurora_probability,
    calculate_simple_probability,
    get_probability_description,
)


DARK_CLEAR = AuroraInputs(kp_index=5, cloud_coverage=20, temperature=-12, latitude=69.65, sun_elevation=-20)


class TestCalculateAuroraProbability(unittest.TestCase):
    """Test suite for calculate_aurora_probability"""

    def test_weighted_result(self):
        """Test a clear, cold, dark night at Tromsø"""
        result = calculate_aurora_probability(DARK_CLEAR)
        # 55.56*0.40 + 100*0.35 + 100*0.10 + 100*0.10 + 50*0.05
        self.assertAlmostEqual(result.score, 79.72, places=2)
        self.assertEqual(result.probability, 80)
        self.assertTrue(result.can_view)
        self.assertIsNone(result.reason)

    def test_weights_sum_to_one(self):
        """Test the factor weights sum to 1"""
        self.assertAlmostEqual(sum(PROBABILITY_WEIGHTS.values()), 1.0)

    def test_daylight_gate(self):
        """Test a bright sky gives zero probability regardless of activity"""
        result = calculate_aurora_probability(replace(DARK_CLEAR, kp_index=9, sun_elevation=5))
        self.assertEqual(result.probability, 0)
        self.assertFalse(result.can_view)
        self.assertEqual(result.reason, "daylight")
        self.assertIsNone(result.next_viewable_time)

    def test_civil_twilight_is_too_bright(self):
        """Test -6 degrees is still too bright"""
        result = calculate_aurora_probability(replace(DARK_CLEAR, sun_elevation=-6))
        self.assertFalse(result.can_view)

    def test_sun_computed_from_location(self):
        """Test daylight is detected from coordinates and time"""
        when = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        result = calculate_aurora_probability(
            replace(DARK_CLEAR, sun_elevation=None, longitude=18.96, when=when)
        )
        self.assertFalse(result.can_view)
        self.assertIsNotNone(result.next_viewable_time)
        self.assertGreater(result.next_viewable_time, when)

    def test_best_time_tonight_from_location(self):
        """Test the darkest time tonight is reported near local solar midnight"""
        when = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        result = calculate_aurora_probability(replace(DARK_CLEAR, sun_elevation=None, longitude=18.96, when=when))
        self.assertIsNotNone(result.best_time_tonight)
        self.assertGreater(result.best_time_tonight, datetime(2026, 3, 1, 22, 15, tzinfo=UTC))
        self.assertLess(result.best_time_tonight, datetime(2026, 3, 1, 23, 30, tzinfo=UTC))

    def test_best_time_tonight_on_dark_result(self):
        """Test a viewable result also carries the best time tonight"""
        when = datetime(2026, 1, 10, 20, 0, tzinfo=UTC)
        result = calculate_aurora_probability(replace(DARK_CLEAR, longitude=18.96, when=when))
        self.assertTrue(result.can_view)
        self.assertIsNotNone(result.best_time_tonight)
        self.assertGreater(result.best_time_tonight, when)

    def test_best_time_tonight_needs_location_and_time(self):
        """Test no best time is reported without longitude and time"""
        self.assertIsNone(calculate_aurora_probability(DARK_CLEAR).best_time_tonight)

    def test_unknown_sun_is_not_gated(self):
        """Test that without sun data the probability is computed"""
        result = calculate_aurora_probability(replace(DARK_CLEAR, sun_elevation=None))
        self.assertTrue(result.can_view)

    def test_cloud_steps(self):
        """Test the cloud score drops steeply with cover"""
        expected = {29: 100, 30: 80, 50: 40, 70: 15, 89: 15, 90: 0}
        for cloud, score in expected.items():
            result = calculate_aurora_probability(replace(DARK_CLEAR, cloud_coverage=cloud))
            self.assertEqual(result.factors.clouds, score, cloud)

    def test_temperature_steps(self):
        """Test colder air scores higher"""
        expected = {-11: 100, -5: 80, 5: 50, 15: 20}
        for temperature, score in expected.items():
            result = calculate_aurora_probability(replace(DARK_CLEAR, temperature=temperature))
            self.assertEqual(result.factors.temperature, score, temperature)

    def test_latitude_steps(self):
        """Test further north scores higher"""
        expected = {69: 100, 67: 80, 65: 60, 60: 40}
        for latitude, score in expected.items():
            result = calculate_aurora_probability(replace(DARK_CLEAR, latitude=latitude))
            self.assertEqual(result.factors.latitude, score, latitude)

    def test_moon_phase(self):
        """Test new moon scores best and full moon worst"""
        expected = {0.0: 100, 0.25: 50, 0.5: 0, 0.75: 50, 1.0: 100}
        for phase, score in expected.items():
            result = calculate_aurora_probability(replace(DARK_CLEAR, moon_phase=phase))
            self.assertAlmostEqual(result.factors.moon, score, msg=phase)

    def test_unknown_moon_is_neutral(self):
        """Test a missing moon phase scores 50"""
        self.assertEqual(calculate_aurora_probability(DARK_CLEAR).factors.moon, 50)

    def test_kp_factor_capped(self):
        """Test Kp above 9 does not push the factor past 100"""
        result = calculate_aurora_probability(replace(DARK_CLEAR, kp_index=12))
        self.assertEqual(result.factors.kp_index, 100)

    def test_probability_bounds(self):
        """Test the best and worst inputs stay within 0-100"""
        best = calculate_aurora_probability(replace(DARK_CLEAR, kp_index=9, cloud_coverage=0, moon_phase=0))
        worst = calculate_aurora_probability(
            AuroraInputs(kp_index=0, cloud_coverage=100, temperature=20, latitude=40, moon_phase=0.5, sun_elevation=-30)
        )
        self.assertEqual(best.probability, 100)
        self.assertEqual(worst.probability, 6)


class TestSimpleProbability(unittest.TestCase):
    """Test suite for calculate_simple_probability"""

    def test_bands(self):
        """Test the piecewise Kp mapping"""
        self.assertEqual(calculate_simple_probability(0), 10)
        self.assertEqual(calculate_simple_probability(3), 19)
        self.assertEqual(calculate_simple_probability(4), 30)
        self.assertEqual(calculate_simple_probability(5), 40)
        self.assertEqual(calculate_simple_probability(6), 50)
        self.assertEqual(calculate_simple_probability(7), 60)
        self.assertEqual(calculate_simple_probability(9), 90)


class TestProbabilityDescription(unittest.TestCase):
    """Test suite for get_probability_description"""

    def test_descriptions(self):
        """Test the description bands"""
        self.assertEqual(get_probability_description(85), "Excellent")
        self.assertEqual(get_probability_description(60), "Good conditions")
        self.assertEqual(get_probability_description(45), "Moderate")
        self.assertEqual(get_probability_description(20), "Poor")
        self.assertEqual(get_probability_description(5), "Slim chance")


if __name__ == "__main__":
    unittest.main()

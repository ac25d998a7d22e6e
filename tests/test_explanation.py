"""
Unit tests for decision/explanation.py

Tests the three fixed explanation templates and their interpolated values.
"""

import unittest
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from aurora_decision.api.core.enums import GlobalState, LimitingFactor
from aurora_decision.api.decision.explanation import EXPLANATION_TEMPLATES, generate_explanation


BEST = datetime(2026, 1, 26, 21, 0, tzinfo=UTC)
NEXT = datetime(2026, 1, 26, 23, 0, tzinfo=UTC)


class TestExcellentTemplate(unittest.TestCase):
    """Test suite for the excellent template"""

    def test_full_text(self):
        """Test the complete excellent sentence"""
        text = generate_explanation(GlobalState.EXCELLENT, 85.2, BEST, LimitingFactor.MIXED_CONDITIONS, tz=UTC)
        self.assertEqual(text, "Strong aurora conditions expected. Best viewing time: 21:00. Confidence: 85/100.")

    def test_travel_minutes(self):
        """Test the travel suffix in minutes"""
        text = generate_explanation(
            GlobalState.EXCELLENT, 85.2, BEST, LimitingFactor.MIXED_CONDITIONS, travel_time_minutes=45, tz=UTC
        )
        self.assertIn("Best viewing time: 21:00 (45 min away). Confidence: 85/100.", text)

    def test_travel_hours_and_minutes(self):
        """Test the travel suffix in hours and minutes"""
        text = generate_explanation(
            GlobalState.EXCELLENT, 85.2, BEST, LimitingFactor.MIXED_CONDITIONS, travel_time_minutes=90, tz=UTC
        )
        self.assertIn("21:00 (1h 30m away)", text)

    def test_travel_zero_names_reference_city(self):
        """Test that zero travel time names the reference city"""
        text = generate_explanation(
            GlobalState.EXCELLENT, 85.2, BEST, LimitingFactor.MIXED_CONDITIONS, travel_time_minutes=0, tz=UTC
        )
        self.assertIn("21:00 (from Tromsø)", text)

        text = generate_explanation(
            GlobalState.EXCELLENT,
            85.2,
            BEST,
            LimitingFactor.MIXED_CONDITIONS,
            travel_time_minutes=0,
            reference_city="Alta",
            tz=UTC,
        )
        self.assertIn("(from Alta)", text)

    def test_display_timezone(self):
        """Test times are rendered in the requested timezone"""
        text = generate_explanation(
            GlobalState.EXCELLENT, 85.2, BEST, LimitingFactor.MIXED_CONDITIONS, tz=ZoneInfo("Europe/Oslo")
        )
        self.assertIn("Best viewing time: 22:00.", text)


class TestPossibleTemplate(unittest.TestCase):
    """Test suite for the possible template"""

    def test_full_text(self):
        """Test the complete possible sentence"""
        text = generate_explanation(GlobalState.POSSIBLE, 63.1, BEST, LimitingFactor.CLOUD_COVER, tz=UTC)
        self.assertEqual(
            text,
            "Limited aurora potential detected. Best window: 21:00. Confidence: 63/100. "
            "Main limitation: too many clouds.",
        )


class TestUnlikelyTemplate(unittest.TestCase):
    """Test suite for the unlikely template"""

    def test_with_next_window(self):
        """Test the next window time is included when present"""
        text = generate_explanation(
            GlobalState.UNLIKELY, 12.0, BEST, LimitingFactor.LOW_KP, next_window_start=NEXT, tz=UTC
        )
        self.assertEqual(
            text,
            "Aurora unlikely in the next 48 hours. Limiting factor: weak geomagnetic activity. "
            "Next possible window: 23:00 (low confidence).",
        )

    def test_without_next_window(self):
        """Test the wording adapts when there is no next window"""
        text = generate_explanation(GlobalState.UNLIKELY, 12.0, BEST, LimitingFactor.TOO_BRIGHT, tz=UTC)
        self.assertEqual(
            text,
            "Aurora unlikely in the next 48 hours. Limiting factor: not dark enough. "
            "Next possible window (low confidence).",
        )

    def test_travel_not_used(self):
        """Test the unlikely template has no travel suffix"""
        text = generate_explanation(
            GlobalState.UNLIKELY, 12.0, BEST, LimitingFactor.LOW_KP, travel_time_minutes=45, tz=UTC
        )
        self.assertNotIn("min away", text)


class TestTemplates(unittest.TestCase):
    """Test suite for the template table"""

    def test_one_template_per_state(self):
        """Test every state has exactly one template"""
        self.assertEqual(set(EXPLANATION_TEMPLATES), set(GlobalState))

    def test_deterministic(self):
        """Test identical arguments give identical text"""
        args = (GlobalState.POSSIBLE, 44.4, BEST, LimitingFactor.MIXED_CONDITIONS)
        self.assertEqual(generate_explanation(*args, tz=UTC), generate_explanation(*args, tz=UTC))


if __name__ == "__main__":
    unittest.main()

"""
Unit tests for decision/global_state.py

Tests best window selection and the darkness and imminence gates.
"""

import unittest
from datetime import UTC, datetime, timedelta

from aurora_decision.api.core.enums import GlobalState, LimitingFactor
from aurora_decision.api.core.exceptions import EmptyForecastError
from aurora_decision.api.core.models import ForecastWindow, ScoredWindow
from aurora_decision.api.decision.global_state import (
    compute_global_state,
    determine_state,
    find_next_window,
    select_best_index,
    select_best_window,
)
from aurora_decision.api.decision.scoring import classify_ads


NOW = datetime(2026, 1, 26, 20, 0, tzinfo=UTC)


def _window(offset_hours: float, ads: float, dark: bool = True) -> ScoredWindow:
    return ScoredWindow(
        time=NOW + timedelta(hours=offset_hours),
        ads=ads,
        classification=classify_ads(ads),
        is_dark_enough=dark,
    )


class TestDetermineState(unittest.TestCase):
    """Test suite for threshold-only state mapping"""

    def test_thresholds(self):
        """Test excellent, possible and unlikely thresholds"""
        self.assertEqual(determine_state(75), GlobalState.EXCELLENT)
        self.assertEqual(determine_state(70), GlobalState.EXCELLENT)
        self.assertEqual(determine_state(55), GlobalState.POSSIBLE)
        self.assertEqual(determine_state(30), GlobalState.POSSIBLE)
        self.assertEqual(determine_state(25), GlobalState.UNLIKELY)


class TestSelectBestWindow(unittest.TestCase):
    """Test suite for select_best_window"""

    def test_prefers_dark_windows(self):
        """Test that a weaker dark window beats a stronger bright one"""
        bright = _window(0, 90, dark=False)
        dark = _window(1, 40)
        self.assertEqual(select_best_window([bright, dark]), dark)

    def test_falls_back_to_overall_max(self):
        """Test fallback to the highest score when nothing is dark"""
        windows = [_window(0, 20, dark=False), _window(1, 60, dark=False), _window(2, 40, dark=False)]
        self.assertEqual(select_best_window(windows).ads, 60)

    def test_ties_keep_earliest(self):
        """Test that equal scores resolve to the earliest window"""
        windows = [_window(0, 50), _window(1, 50), _window(2, 50)]
        self.assertEqual(select_best_window(windows).time, NOW)

    def test_empty_raises(self):
        """Test that an empty window list is rejected"""
        with self.assertRaises(EmptyForecastError):
            select_best_window([])


class TestComputeGlobalState(unittest.TestCase):
    """Test suite for compute_global_state"""

    def test_darkness_gate(self):
        """Test that ADS 90 in daylight can never be better than unlikely"""
        result = compute_global_state([_window(0, 90, dark=False)], LimitingFactor.TOO_BRIGHT, NOW)
        self.assertEqual(result.state, GlobalState.UNLIKELY)
        self.assertEqual(result.best_window.limiting_factor, LimitingFactor.TOO_BRIGHT)

    def test_imminence_cap(self):
        """Test that ADS 85 three hours away is capped at possible"""
        result = compute_global_state([_window(3, 85)], LimitingFactor.MIXED_CONDITIONS, NOW)
        self.assertEqual(result.state, GlobalState.POSSIBLE)

    def test_imminent_excellent(self):
        """Test that ADS 85 within 30 minutes is excellent"""
        window = ScoredWindow(
            time=NOW + timedelta(minutes=20), ads=85, classification=classify_ads(85), is_dark_enough=True
        )
        result = compute_global_state([window], LimitingFactor.MIXED_CONDITIONS, NOW)
        self.assertEqual(result.state, GlobalState.EXCELLENT)

    def test_thirty_minutes_is_still_imminent(self):
        """Test the imminence gate only triggers beyond 30 minutes"""
        window = ScoredWindow(
            time=NOW + timedelta(minutes=30), ads=85, classification=classify_ads(85), is_dark_enough=True
        )
        result = compute_global_state([window], LimitingFactor.MIXED_CONDITIONS, NOW)
        self.assertEqual(result.state, GlobalState.EXCELLENT)

    def test_past_window_uses_absolute_gap(self):
        """Test that a best window hours in the past is also capped"""
        result = compute_global_state([_window(-3, 85)], LimitingFactor.MIXED_CONDITIONS, NOW)
        self.assertEqual(result.state, GlobalState.POSSIBLE)

    def test_possible_not_capped_further(self):
        """Test that a distant possible window stays possible"""
        result = compute_global_state([_window(5, 45)], LimitingFactor.CLOUD_COVER, NOW)
        self.assertEqual(result.state, GlobalState.POSSIBLE)
        self.assertIsNone(result.next_window)

    def test_unlikely_when_all_scores_low(self):
        """Test unlikely when no dark window reaches 30"""
        windows = [_window(0, 15), _window(1, 25)]
        result = compute_global_state(windows, LimitingFactor.LOW_KP, NOW)
        self.assertEqual(result.state, GlobalState.UNLIKELY)
        self.assertIsNone(result.next_window)

    def test_next_window_reported_when_unlikely(self):
        """Test the first viable window is reported for an unlikely verdict"""
        windows = [_window(0, 15, dark=False), _window(1, 35, dark=False), _window(2, 45, dark=False)]
        result = compute_global_state(windows, LimitingFactor.TOO_BRIGHT, NOW)
        self.assertEqual(result.state, GlobalState.UNLIKELY)
        self.assertIsNotNone(result.next_window)
        self.assertEqual(result.next_window.ads, 35)
        self.assertEqual(result.next_window.start, NOW + timedelta(hours=1))

    def test_best_window_lasts_one_hour(self):
        """Test the best window ends one hour after it starts"""
        result = compute_global_state([_window(0, 60)], LimitingFactor.MIXED_CONDITIONS, NOW)
        self.assertEqual(result.best_window.end - result.best_window.start, timedelta(hours=1))

    def test_echoes_provider_probability(self):
        """Test the provider probability for the best window's timestamp is echoed"""
        forecasts = [
            ForecastWindow(time=NOW, cloud_cover=10, solar_elevation=-20, kp_index=5, probability=42),
            ForecastWindow(time=NOW + timedelta(hours=1), cloud_cover=10, solar_elevation=-20, kp_index=5),
        ]
        result = compute_global_state([_window(0, 60), _window(1, 50)], LimitingFactor.MIXED_CONDITIONS, NOW, forecasts)
        self.assertEqual(result.best_window.probability_from_forecast, 42)

    def test_probability_paired_by_position(self):
        """Test the echoed probability comes from the best window's own row when timestamps repeat"""
        forecasts = [
            ForecastWindow(time=NOW, cloud_cover=80, solar_elevation=-20, kp_index=2, probability=10),
            ForecastWindow(time=NOW, cloud_cover=10, solar_elevation=-20, kp_index=7, probability=77),
        ]
        windows = [_window(0, 20), _window(0, 80)]
        result = compute_global_state(windows, LimitingFactor.MIXED_CONDITIONS, NOW, forecasts)
        self.assertEqual(result.best_window.probability_from_forecast, 77)

    def test_explicit_best_index(self):
        """Test a preselected best index is used as given"""
        windows = [_window(0, 40), _window(1, 80)]
        result = compute_global_state(windows, LimitingFactor.MIXED_CONDITIONS, NOW, best_index=1)
        self.assertEqual(result.best_window.ads, 80)
        self.assertEqual(select_best_index(windows), 1)

    def test_missing_probability_is_omitted(self):
        """Test that a missing provider probability stays None"""
        forecasts = [ForecastWindow(time=NOW, cloud_cover=10, solar_elevation=-20, kp_index=5)]
        result = compute_global_state([_window(0, 60)], LimitingFactor.MIXED_CONDITIONS, NOW, forecasts)
        self.assertIsNone(result.best_window.probability_from_forecast)

    def test_empty_raises(self):
        """Test that an empty window list is rejected"""
        with self.assertRaises(EmptyForecastError):
            compute_global_state([], LimitingFactor.MIXED_CONDITIONS, NOW)


class TestFindNextWindow(unittest.TestCase):
    """Test suite for find_next_window"""

    def test_first_viable_in_forecast_order(self):
        """Test the earliest window at or above 30 is returned, not the best"""
        windows = [_window(0, 10), _window(1, 30), _window(2, 80)]
        next_window = find_next_window(windows)
        self.assertEqual(next_window.ads, 30)

    def test_none_viable(self):
        """Test None when nothing reaches 30"""
        self.assertIsNone(find_next_window([_window(0, 10), _window(1, 29.9)]))


if __name__ == "__main__":
    unittest.main()

"""
UI Directives

Translates scored windows into a small set of display hints. Callers render
from these hints only and do not repeat any decision logic.
"""

from __future__ import annotations

from collections.abc import Sequence

from aurora_decision.api.core.constants import (
    ADS_GOOD_THRESHOLD,
    ADS_MODERATE_THRESHOLD,
    UI_HIDE_GRID_THRESHOLD,
)
from aurora_decision.api.core.models import ScoredWindow, UIDirectives


__all__ = [
    "MAX_HIGHLIGHTS",
    "generate_ui_directives",
    "get_windows_to_highlight",
    "should_show_full_grid",
]


MAX_HIGHLIGHTS = 3

_HIDDEN = UIDirectives(show_48_grid=False, highlight_top=0, show_best_banner=False)


def generate_ui_directives(windows: Sequence[ScoredWindow]) -> UIDirectives:
    """
    Generate display hints from the scored windows.

    Rules, evaluated top-down:
    1. Max ADS < 20: hide the grid, no highlights, no banner
    2. Any ADS >= 50: show the grid, highlight the top 3, show the banner
    3. 1-3 windows with ADS >= 30: show the grid, highlight the best one, show the banner
    4. No window with ADS >= 30: show the grid, no highlights, no banner
    5. More than 3 windows with ADS >= 30 (none >= 50): show the grid,
       highlight the best one, show the banner

    The banner is shown exactly when the max ADS is at least 30.
    """
    if not windows:
        return _HIDDEN

    max_ads = max(w.ads for w in windows)
    if max_ads < UI_HIDE_GRID_THRESHOLD:
        return _HIDDEN

    show_best_banner = max_ads >= ADS_MODERATE_THRESHOLD

    if any(w.ads >= ADS_GOOD_THRESHOLD for w in windows):
        return UIDirectives(show_48_grid=True, highlight_top=MAX_HIGHLIGHTS, show_best_banner=show_best_banner)

    viable_count = sum(1 for w in windows if w.ads >= ADS_MODERATE_THRESHOLD)
    if viable_count == 0:
        return UIDirectives(show_48_grid=True, highlight_top=0, show_best_banner=show_best_banner)

    # 1-3 viable windows, or more viable windows that are all below "good"
    return UIDirectives(show_48_grid=True, highlight_top=1, show_best_banner=show_best_banner)


def should_show_full_grid(max_ads: float) -> bool:
    """Whether the grid should show every window rather than only viable ones."""
    return max_ads >= ADS_GOOD_THRESHOLD


def get_windows_to_highlight(windows: Sequence[ScoredWindow], highlight_count: int) -> list[int]:
    """
    Indices of the windows to highlight.

    Args:
        windows: Scored windows in forecast order
        highlight_count: Number of top windows to highlight (0-3)

    Returns:
        Indices of the top windows by ADS, in forecast order
    """
    if highlight_count <= 0:
        return []
    # sorted() is stable, so equal scores keep forecast order
    ranked = sorted(range(len(windows)), key=lambda i: windows[i].ads, reverse=True)
    return sorted(ranked[:highlight_count])

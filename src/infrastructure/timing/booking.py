"""Booking lead-time scoring."""
from __future__ import annotations

from src.core.entities import Bonus

OPTIMAL_WINDOW_REASON = "optimal booking window (4-8 weeks out)"


class BookingTimelinessAnalyzer:
    """Flat bonus for candidate weeks inside the ideal booking lead time."""

    def __init__(self, earliest_week: int = 4, latest_week: int = 8, bonus: float = 0.3) -> None:
        if earliest_week > latest_week:
            raise ValueError("earliest_week must not be greater than latest_week")
        self._earliest_week = earliest_week
        self._latest_week = latest_week
        self._bonus = bonus

    def analyze(self, weeks_from_now: int) -> Bonus:
        if self._earliest_week <= weeks_from_now <= self._latest_week:
            return Bonus(self._bonus, OPTIMAL_WINDOW_REASON)
        return Bonus.none()


__all__ = ["BookingTimelinessAnalyzer", "OPTIMAL_WINDOW_REASON"]

"""Unit tests for upcoming week generation."""
from __future__ import annotations

from datetime import date, timedelta

from src.infrastructure.timing.weeks import next_monday, upcoming_weeks, week_label


def test_next_monday_never_returns_today() -> None:
    assert next_monday(date(2026, 10, 17)) == date(2026, 10, 19)
    assert next_monday(date(2026, 10, 18)) == date(2026, 10, 19)
    assert next_monday(date(2026, 10, 19)) == date(2026, 10, 26)


def test_upcoming_weeks_are_consecutive_mondays() -> None:
    weeks = upcoming_weeks(date(2026, 10, 17))

    assert len(weeks) == 12
    assert [week.weeks_from_now for week in weeks] == list(range(1, 13))
    assert weeks[0].start == date(2026, 10, 19)
    for week in weeks:
        assert week.start.weekday() == 0
        assert week.end - week.start == timedelta(days=6)
        assert week.month == week.start.month
    assert weeks[-1].start == date(2027, 1, 4)
    assert weeks[-1].month == 1


def test_week_label_uses_week_of_month_ordinal() -> None:
    assert week_label(date(2026, 10, 19)) == "October 3rd week"
    assert week_label(date(2026, 11, 2)) == "November 1st week"
    assert week_label(date(2026, 11, 9)) == "November 2nd week"
    assert week_label(date(2026, 11, 30)) == "November 5th week"

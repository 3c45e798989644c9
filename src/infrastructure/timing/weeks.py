"""Generation of the upcoming candidate weeks."""
from __future__ import annotations

import calendar
import math
from datetime import date, timedelta

from src.core.entities import WeekRange

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}


def _ordinal(value: int) -> str:
    return _ORDINALS.get(value, f"{value}th")


def next_monday(today: date) -> date:
    """The Monday strictly after ``today``; a Monday maps to the following week."""

    return today + timedelta(days=7 - today.weekday())


def week_label(start: date) -> str:
    week_of_month = math.ceil(start.day / 7)
    return f"{calendar.month_name[start.month]} {_ordinal(week_of_month)} week"


def upcoming_weeks(today: date, count: int = 12) -> list[WeekRange]:
    anchor = next_monday(today)
    weeks: list[WeekRange] = []
    for index in range(count):
        start = anchor + timedelta(weeks=index)
        weeks.append(
            WeekRange(
                start=start,
                end=start + timedelta(days=6),
                label=week_label(start),
                month=start.month,
                weeks_from_now=index + 1,
            )
        )
    return weeks


__all__ = ["next_monday", "upcoming_weeks", "week_label"]

"""Seasonal proximity detection and recurring-season arithmetic."""
from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, Mapping, Sequence

from src.core.entities import Bonus, Season
from src.utils.logger import logger

IMMINENT_WINDOW_DAYS = 14


def is_date_in_season(month: int, day: int, season: Season) -> bool:
    """Return whether ``month``/``day`` falls inside the recurring season.

    Seasons whose end precedes their start wrap around the new year.
    """

    current = month * 100 + day
    start = season.start_month * 100 + season.start_day
    end = season.end_month * 100 + season.end_day
    if start <= end:
        return start <= current <= end
    return current >= start or current <= end


def _season_start_in(year: int, season: Season) -> date:
    day = min(season.start_day, calendar.monthrange(year, season.start_month)[1])
    return date(year, season.start_month, day)


def days_until_season_start(today: date, season: Season) -> int:
    """Days until the next start of ``season``; zero while it is under way."""

    if is_date_in_season(today.month, today.day, season):
        return 0

    start = _season_start_in(today.year, season)
    if start <= today:
        start = _season_start_in(today.year + 1, season)
    return (start - today).days


def seasons_overlapping_month(seasons: Iterable[Season], month: int) -> list[Season]:
    """Seasons that include at least one day of ``month`` in a non-leap year."""

    last_day = calendar.monthrange(2001, month)[1]
    return [
        season
        for season in seasons
        if any(is_date_in_season(month, day, season) for day in range(1, last_day + 1))
    ]


def validate_season(season: Season) -> Season:
    for month, day in ((season.start_month, season.start_day), (season.end_month, season.end_day)):
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month {month} in season '{season.name}'.")
        if not 1 <= day <= calendar.monthrange(2000, month)[1]:
            raise ValueError(f"Invalid day {day} for month {month} in season '{season.name}'.")
    return season


class SeasonProximityAnalyzer:
    """Credit weeks that fall inside a known season or just ahead of one."""

    def __init__(
        self,
        in_season_bonus: float = 0.3,
        imminent_bonus: float = 0.5,
        imminent_window_days: int = IMMINENT_WINDOW_DAYS,
    ) -> None:
        self._in_season_bonus = in_season_bonus
        self._imminent_bonus = imminent_bonus
        self._imminent_window_days = imminent_window_days

    def analyze(self, seasons: Sequence[Season], week_start: date, today: date) -> Bonus:
        for season in seasons:
            days_until = days_until_season_start(today, season)
            imminent = 0 < days_until <= self._imminent_window_days

            if is_date_in_season(week_start.month, week_start.day, season):
                if imminent:
                    return self._imminent(season)
                logger.debug("Week of {} falls inside {}", week_start, season.name)
                return Bonus(self._in_season_bonus, season.name)

            # A week can anticipate a season it does not overlap yet.
            if imminent:
                return self._imminent(season)

        return Bonus.none()

    def _imminent(self, season: Season) -> Bonus:
        logger.debug("{} starts within {} days", season.name, self._imminent_window_days)
        return Bonus(self._imminent_bonus, f"{season.name} starting soon")


def group_by_city(seasons: Iterable[Season]) -> Mapping[str, tuple[Season, ...]]:
    grouped: dict[str, list[Season]] = {}
    for season in seasons:
        grouped.setdefault(season.city_id, []).append(season)
    return {city_id: tuple(entries) for city_id, entries in grouped.items()}


__all__ = [
    "IMMINENT_WINDOW_DAYS",
    "SeasonProximityAnalyzer",
    "days_until_season_start",
    "group_by_city",
    "is_date_in_season",
    "seasons_overlapping_month",
    "validate_season",
]

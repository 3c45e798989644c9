"""YAML-backed season calendars."""
from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml

from src.core.entities import Season
from src.infrastructure.timing.seasons import group_by_city, validate_season
from src.utils.logger import logger


class YAMLSeasonCalendarSource:
    """Load per-city recurring seasons, keyed by city id."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> Mapping[str, tuple[Season, ...]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Season calendar not found: {self._path}")

        with self._path.open("r", encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}

        seasons: list[Season] = []
        for city_id, entries in (data.get("seasons") or {}).items():
            for entry in entries or ():
                start_month, start_day = _parse_month_day(entry["start"])
                end_month, end_day = _parse_month_day(entry["end"])
                seasons.append(
                    validate_season(
                        Season(
                            city_id=str(city_id),
                            name=str(entry["name"]),
                            start_month=start_month,
                            start_day=start_day,
                            end_month=end_month,
                            end_day=end_day,
                        )
                    )
                )

        logger.info("Loaded {} seasons from {}", len(seasons), self._path)
        return group_by_city(seasons)


def _parse_month_day(value: object) -> tuple[int, int]:
    """Parse ``"MM-DD"`` strings into a ``(month, day)`` tuple."""

    text = str(value).strip()
    parts = text.split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"Expected a 'MM-DD' value, got {value!r}")
    return int(parts[0]), int(parts[1])


__all__ = ["YAMLSeasonCalendarSource"]

"""JSON-backed cache of short range forecasts."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from src.core.entities import ForecastSnapshot
from src.infrastructure.timing.forecast import DEFAULT_HISTORICAL_CLEAR_RATIO, summarise_forecast_days
from src.utils.logger import logger


def _parse_timestamp(value: Any) -> datetime:
    stamp = pd.to_datetime(value, utc=True)
    if pd.isna(stamp):
        raise ValueError(f"Invalid fetched_at timestamp: {value!r}")
    return stamp.to_pydatetime()


class ForecastCacheJSONSource:
    """Load cached daily forecasts and summarise them per city.

    Staleness is left to the caller; every parsable entry is returned with its
    fetch timestamp.
    """

    def __init__(
        self,
        path: str | Path,
        default_historical_clear_ratio: float = DEFAULT_HISTORICAL_CLEAR_RATIO,
    ) -> None:
        self._path = Path(path)
        self._default_historical = default_historical_clear_ratio

    def load(self) -> dict[str, ForecastSnapshot]:
        if not self._path.exists():
            raise FileNotFoundError(f"Forecast cache not found: {self._path}")

        payload = json.loads(self._path.read_text(encoding="utf-8"))
        snapshots: dict[str, ForecastSnapshot] = {}
        for city_id, entry in (payload or {}).items():
            try:
                snapshots[str(city_id)] = self._parse_entry(str(city_id), entry)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid forecast cache entry for {}: {}", city_id, exc)

        logger.info("Loaded {} forecast snapshots from {}", len(snapshots), self._path)
        return snapshots

    def _parse_entry(self, city_id: str, entry: Mapping[str, Any]) -> ForecastSnapshot:
        fetched_at = _parse_timestamp(entry["fetched_at"])
        historical = entry.get("historical_clear_ratio")
        if historical is None:
            historical = self._default_historical

        if "clear_ratio" in entry:
            return ForecastSnapshot(
                city_id=city_id,
                clear_ratio=float(entry["clear_ratio"]),
                fetched_at=fetched_at,
                historical_clear_ratio=float(historical),
            )

        days = entry["days"]
        if not isinstance(days, list):
            raise TypeError("'days' must be a list of daily forecasts")
        return summarise_forecast_days(city_id, days, fetched_at, float(historical))


__all__ = ["ForecastCacheJSONSource"]

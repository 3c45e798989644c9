"""Forecast freshness analysis and forecast-versus-climate comparisons."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional, Sequence

from src.core.entities import Bonus, ForecastSnapshot
from src.core.scoring import round_half_up
from src.utils.logger import logger

DEFAULT_HISTORICAL_CLEAR_RATIO = 0.6
FRESHNESS_HORIZON = timedelta(hours=6)

_SIGNIFICANT_DIFFERENCE = 0.1
_ADJUSTMENT_SCALE = 3
_MAX_ADJUSTMENT = 0.5
# WMO codes 0-2: clear sky, mainly clear, partly cloudy.
_MAX_CLEAR_WEATHER_CODE = 2


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _percent(ratio: float) -> int:
    return int(round_half_up(ratio * 100, 0))


def is_clear_day(day: Mapping[str, Any]) -> bool:
    if "is_clear" in day and day["is_clear"] is not None:
        return bool(day["is_clear"])
    code = day.get("weather_code")
    if code is None:
        return False
    return int(code) <= _MAX_CLEAR_WEATHER_CODE


def summarise_forecast_days(
    city_id: str,
    days: Sequence[Mapping[str, Any]],
    fetched_at: datetime,
    historical_clear_ratio: Optional[float] = None,
) -> ForecastSnapshot:
    """Collapse daily forecast records into a clear-day ratio snapshot."""

    clear_days = sum(1 for day in days if is_clear_day(day))
    clear_ratio = clear_days / len(days) if days else 0.0
    historical = (
        DEFAULT_HISTORICAL_CLEAR_RATIO
        if historical_clear_ratio is None
        else float(historical_clear_ratio)
    )
    return ForecastSnapshot(
        city_id=city_id,
        clear_ratio=clear_ratio,
        fetched_at=fetched_at,
        historical_clear_ratio=historical,
    )


def forecast_adjustment(clear_ratio: float, historical_clear_ratio: float) -> float:
    """Signed weather correction in ``[-0.5, 0.5]`` from a forecast/climate gap."""

    diff = clear_ratio - historical_clear_ratio
    if diff > _SIGNIFICANT_DIFFERENCE:
        return min(_MAX_ADJUSTMENT, round_half_up(diff * _ADJUSTMENT_SCALE))
    if diff < -_SIGNIFICANT_DIFFERENCE:
        return max(-_MAX_ADJUSTMENT, round_half_up(diff * _ADJUSTMENT_SCALE))
    return 0.0


@dataclass(frozen=True)
class ForecastComparison:
    label: str
    adjustment: float
    text: str


def forecast_comparison(snapshot: ForecastSnapshot) -> ForecastComparison:
    adjustment = forecast_adjustment(snapshot.clear_ratio, snapshot.historical_clear_ratio)
    pct = _percent(snapshot.clear_ratio)
    historical_pct = _percent(snapshot.historical_clear_ratio)

    if adjustment > 0:
        label = "better"
        text = f"clear days {pct}% · better than the historical {historical_pct}%"
    elif adjustment < 0:
        label = "worse"
        text = f"clear days {pct}% · worse than the historical {historical_pct}%"
    else:
        label = "similar"
        text = f"clear days {pct}% · similar to the historical {historical_pct}%"
    return ForecastComparison(label=label, adjustment=adjustment, text=text)


class ForecastFreshnessAnalyzer:
    """Reward fresh forecasts that beat the climate norm for clear days."""

    def __init__(
        self,
        freshness_horizon: timedelta = FRESHNESS_HORIZON,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._freshness_horizon = freshness_horizon
        self._now_provider = now_provider or (lambda: datetime.now(timezone.utc))

    def is_fresh(self, snapshot: ForecastSnapshot, now: Optional[datetime] = None) -> bool:
        reference = _as_utc(now or self._now_provider())
        return reference - _as_utc(snapshot.fetched_at) <= self._freshness_horizon

    def analyze(
        self,
        city_id: str,
        cache: Mapping[str, ForecastSnapshot],
        now: Optional[datetime] = None,
    ) -> Bonus:
        snapshot = cache.get(city_id)
        if snapshot is None:
            return Bonus.none()
        if not self.is_fresh(snapshot, now):
            logger.debug("Ignoring stale forecast for {} fetched at {}", city_id, snapshot.fetched_at)
            return Bonus.none()

        diff = snapshot.clear_ratio - snapshot.historical_clear_ratio
        if diff <= _SIGNIFICANT_DIFFERENCE:
            return Bonus.none()

        amount = min(_MAX_ADJUSTMENT, round_half_up(diff * _ADJUSTMENT_SCALE))
        return Bonus(amount, f"forecast shows {_percent(snapshot.clear_ratio)}% clear days")


__all__ = [
    "DEFAULT_HISTORICAL_CLEAR_RATIO",
    "FRESHNESS_HORIZON",
    "ForecastComparison",
    "ForecastFreshnessAnalyzer",
    "forecast_adjustment",
    "forecast_comparison",
    "is_clear_day",
    "summarise_forecast_days",
]

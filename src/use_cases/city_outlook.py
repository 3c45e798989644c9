"""Use case summarising the twelve month outlook of one city."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional, Protocol

from src.core.entities import City, ForecastSnapshot
from src.core.scoring import ScoreBreakdown
from src.infrastructure.timing.forecast import (
    ForecastComparison,
    ForecastFreshnessAnalyzer,
    forecast_comparison,
)
from src.utils.logger import logger


class CityLookup(Protocol):
    def get(self, city_id: str) -> City:
        ...


class ForecastFreshness(Protocol):
    def is_fresh(self, snapshot: ForecastSnapshot, now: Optional[datetime] = None) -> bool:
        ...


@dataclass(frozen=True)
class CityOutlook:
    city: City
    monthly_scores: tuple[tuple[int, ScoreBreakdown], ...]
    best_month: Optional[int]
    best_score: float
    current_month: int
    current_score: float
    forecast: Optional[ForecastComparison] = None


class CityOutlookUseCase:
    """Find the best month to visit a city and how the current month compares.

    When a fresh forecast is cached for the city, the outlook also carries its
    comparison against the climate norm. Stale forecasts are left out.
    """

    def __init__(
        self,
        catalog: CityLookup,
        freshness: ForecastFreshness | None = None,
    ) -> None:
        self._catalog = catalog
        self._freshness = freshness or ForecastFreshnessAnalyzer()

    def execute(
        self,
        city_id: str,
        base_scores: Mapping[tuple[str, int], ScoreBreakdown],
        today: date,
        forecast_cache: Mapping[str, ForecastSnapshot] | None = None,
        now: Optional[datetime] = None,
    ) -> CityOutlook:
        city = self._catalog.get(city_id)
        monthly = tuple(
            (month, base_scores[(city.id, month)])
            for month in range(1, 13)
            if (city.id, month) in base_scores
        )

        best_month: Optional[int] = None
        best_score = 0.0
        for month, breakdown in monthly:
            if breakdown.total > best_score:
                best_month, best_score = month, breakdown.total

        current = base_scores.get((city.id, today.month))
        return CityOutlook(
            city=city,
            monthly_scores=monthly,
            best_month=best_month,
            best_score=best_score,
            current_month=today.month,
            current_score=current.total if current is not None else 0.0,
            forecast=self._forecast_view(city.id, forecast_cache or {}, now),
        )

    def _forecast_view(
        self,
        city_id: str,
        cache: Mapping[str, ForecastSnapshot],
        now: Optional[datetime],
    ) -> Optional[ForecastComparison]:
        snapshot = cache.get(city_id)
        if snapshot is None:
            return None
        if not self._freshness.is_fresh(snapshot, now):
            logger.debug("Forecast for {} is stale; leaving it out of the outlook", city_id)
            return None
        return forecast_comparison(snapshot)


__all__ = ["CityLookup", "CityOutlook", "CityOutlookUseCase"]

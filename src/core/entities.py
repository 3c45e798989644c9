"""Core entities for the travel timing recommendation domain."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from src.core.scoring import ScoreGrade, grade


@dataclass(frozen=True)
class City:
    """Reference data for a destination in the catalog."""

    id: str
    name: str
    country: str
    country_code: str
    currency: str
    latitude: float
    longitude: float
    local_name: Optional[str] = None
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class WeekRange:
    """A seven day candidate travel period, starting on a Monday."""

    start: date
    end: date
    label: str
    month: int
    weeks_from_now: int


@dataclass(frozen=True)
class ExchangeObservation:
    """Local-currency units paid for one unit of the destination currency."""

    rate_date: date
    rate: float


@dataclass(frozen=True)
class Season:
    """A named recurring period for a city, bounded by month and day."""

    city_id: str
    name: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int


@dataclass(frozen=True)
class ForecastSnapshot:
    """Cached short range forecast summary for one city."""

    city_id: str
    clear_ratio: float
    fetched_at: datetime
    historical_clear_ratio: float = 0.6


@dataclass(frozen=True)
class Bonus:
    """Additive adjustment produced by one analyzer for one candidate."""

    amount: float = 0.0
    reason: Optional[str] = None

    @classmethod
    def none(cls) -> "Bonus":
        return cls()


@dataclass(frozen=True)
class BonusBreakdown:
    exchange_rate: float = 0.0
    forecast: float = 0.0
    season: float = 0.0
    timeliness: float = 0.0

    @property
    def total(self) -> float:
        return self.exchange_rate + self.forecast + self.season + self.timeliness


@dataclass(frozen=True)
class RecommendedPeriod:
    start: date
    end: date
    label: str


@dataclass(frozen=True)
class RankedRecommendation:
    """One ranked (city, week) recommendation produced by a ranking run."""

    city: City
    period: RecommendedPeriod
    score: float
    base_score: float
    bonuses: BonusBreakdown
    reasons: tuple[str, ...] = ()
    rank: int = 0

    @property
    def grade(self) -> ScoreGrade:
        return grade(self.score)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "city": {
                "id": self.city.id,
                "name": self.city.name,
                "local_name": self.city.local_name,
                "country": self.city.country,
                "country_code": self.city.country_code,
                "currency": self.city.currency,
                "latitude": self.city.latitude,
                "longitude": self.city.longitude,
                "keywords": list(self.city.keywords),
            },
            "recommended_period": {
                "start": self.period.start.isoformat(),
                "end": self.period.end.isoformat(),
                "label": self.period.label,
            },
            "score": self.score,
            "base_score": self.base_score,
            "bonuses": {
                "exchange_rate": self.bonuses.exchange_rate,
                "forecast": self.bonuses.forecast,
                "season": self.bonuses.season,
                "timeliness": self.bonuses.timeliness,
            },
            "reasons": list(self.reasons),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RankedRecommendation":
        city = payload["city"]
        period = payload["recommended_period"]
        bonuses = payload.get("bonuses", {})
        return cls(
            city=City(
                id=str(city["id"]),
                name=str(city["name"]),
                local_name=city.get("local_name"),
                country=str(city["country"]),
                country_code=str(city["country_code"]),
                currency=str(city["currency"]),
                latitude=float(city["latitude"]),
                longitude=float(city["longitude"]),
                keywords=tuple(city.get("keywords", ())),
            ),
            period=RecommendedPeriod(
                start=date.fromisoformat(period["start"]),
                end=date.fromisoformat(period["end"]),
                label=str(period["label"]),
            ),
            score=float(payload["score"]),
            base_score=float(payload["base_score"]),
            bonuses=BonusBreakdown(
                exchange_rate=float(bonuses.get("exchange_rate", 0.0)),
                forecast=float(bonuses.get("forecast", 0.0)),
                season=float(bonuses.get("season", 0.0)),
                timeliness=float(bonuses.get("timeliness", 0.0)),
            ),
            reasons=tuple(payload.get("reasons", ())),
            rank=int(payload.get("rank", 0)),
        )


@dataclass(frozen=True)
class RankingSnapshot:
    """A persisted ranking keyed by the evaluation date."""

    evaluation_date: date
    generated_at: datetime
    rankings: tuple[RankedRecommendation, ...] = field(default_factory=tuple)

    def is_stale(self, now: datetime, max_age_seconds: float) -> bool:
        return (now - self.generated_at).total_seconds() > max_age_seconds


__all__ = [
    "Bonus",
    "BonusBreakdown",
    "City",
    "ExchangeObservation",
    "ForecastSnapshot",
    "RankedRecommendation",
    "RankingSnapshot",
    "RecommendedPeriod",
    "Season",
    "WeekRange",
]

"""Use case ranking the best (city, upcoming week) travel timings for today."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Mapping, Optional, Protocol, Sequence

from src.core.entities import (
    Bonus,
    BonusBreakdown,
    City,
    ExchangeObservation,
    ForecastSnapshot,
    RankedRecommendation,
    RecommendedPeriod,
    Season,
    WeekRange,
)
from src.core.scoring import ScoreBreakdown, round_half_up
from src.infrastructure.timing import (
    BookingTimelinessAnalyzer,
    ExchangeTrendAnalyzer,
    ForecastFreshnessAnalyzer,
    SeasonProximityAnalyzer,
    upcoming_weeks,
)
from src.utils.logger import logger

IDEAL_WEATHER_REASON = "ideal weather"
UNCROWDED_REASON = "off-peak, uncrowded"

BaseScoreTable = Mapping[tuple[str, int], ScoreBreakdown]


class ExchangeAnalyzer(Protocol):
    def analyze(
        self,
        currency: str,
        observations: Sequence[ExchangeObservation],
        as_of: Optional[date] = None,
    ) -> Bonus:
        ...


class ForecastAnalyzer(Protocol):
    def analyze(
        self,
        city_id: str,
        cache: Mapping[str, ForecastSnapshot],
        now: Optional[datetime] = None,
    ) -> Bonus:
        ...


class SeasonAnalyzer(Protocol):
    def analyze(self, seasons: Sequence[Season], week_start: date, today: date) -> Bonus:
        ...


class TimelinessAnalyzer(Protocol):
    def analyze(self, weeks_from_now: int) -> Bonus:
        ...


@dataclass(frozen=True)
class RankingInputs:
    """Read-only datasets consumed by a ranking run."""

    base_scores: BaseScoreTable
    exchange_history: Mapping[str, Sequence[ExchangeObservation]]
    seasons: Mapping[str, Sequence[Season]]
    forecast_cache: Mapping[str, ForecastSnapshot]

    @classmethod
    def empty(cls) -> "RankingInputs":
        return cls(base_scores={}, exchange_history={}, seasons={}, forecast_cache={})


class RankTodayBestUseCase:
    """Score every city against the next weeks and keep the best week per city.

    Candidates are evaluated city-major, week-ascending. When two weeks of the
    same city tie, the earlier week is kept.

    ``now`` is the reference instant for forecast freshness. When it is
    omitted the forecast analyzer falls back to its own clock (the wall clock
    by default), so pass it explicitly for reproducible runs.
    """

    def __init__(
        self,
        exchange_analyzer: ExchangeAnalyzer | None = None,
        forecast_analyzer: ForecastAnalyzer | None = None,
        season_analyzer: SeasonAnalyzer | None = None,
        timeliness_analyzer: TimelinessAnalyzer | None = None,
        weeks: int = 12,
        top_n: int = 10,
        max_reasons: int = 3,
    ) -> None:
        self._exchange_analyzer = exchange_analyzer or ExchangeTrendAnalyzer()
        self._forecast_analyzer = forecast_analyzer or ForecastFreshnessAnalyzer()
        self._season_analyzer = season_analyzer or SeasonProximityAnalyzer()
        self._timeliness_analyzer = timeliness_analyzer or BookingTimelinessAnalyzer()
        self._weeks = weeks
        self._top_n = top_n
        self._max_reasons = max_reasons

    def execute(
        self,
        today: date,
        cities: Sequence[City],
        inputs: RankingInputs,
        now: Optional[datetime] = None,
    ) -> list[RankedRecommendation]:
        weeks = upcoming_weeks(today, self._weeks)
        logger.info(
            "Evaluating {} cities across {} weeks starting {}",
            len(cities),
            len(weeks),
            weeks[0].start if weeks else today,
        )

        best_per_city: dict[str, RankedRecommendation] = {}
        evaluated = 0
        for city in cities:
            # Currency and forecast signals do not depend on the week.
            exchange = self._exchange_analyzer.analyze(
                city.currency,
                inputs.exchange_history.get(city.currency, ()),
                as_of=today,
            )
            forecast = self._forecast_analyzer.analyze(city.id, inputs.forecast_cache, now=now)
            for week in weeks:
                candidate = self._evaluate(city, week, today, inputs, exchange, forecast)
                if candidate is None:
                    continue
                evaluated += 1
                current = best_per_city.get(city.id)
                if current is None or candidate.score > current.score:
                    best_per_city[city.id] = candidate

        ranked = sorted(best_per_city.values(), key=lambda item: item.score, reverse=True)
        ranked = ranked[: self._top_n]
        logger.info(
            "Ranked {} cities from {} candidates; returning {}",
            len(best_per_city),
            evaluated,
            len(ranked),
        )
        return [replace(item, rank=index + 1) for index, item in enumerate(ranked)]

    def _evaluate(
        self,
        city: City,
        week: WeekRange,
        today: date,
        inputs: RankingInputs,
        exchange: Bonus,
        forecast: Bonus,
    ) -> RankedRecommendation | None:
        base = inputs.base_scores.get((city.id, week.month))
        if base is None:
            return None

        season = self._season_analyzer.analyze(inputs.seasons.get(city.id, ()), week.start, today)
        timeliness = self._timeliness_analyzer.analyze(week.weeks_from_now)

        bonuses = BonusBreakdown(
            exchange_rate=exchange.amount,
            forecast=forecast.amount,
            season=season.amount,
            timeliness=timeliness.amount,
        )
        reasons = [bonus.reason for bonus in (exchange, forecast, season, timeliness) if bonus.reason]
        if base.weather >= 8:
            reasons.append(IDEAL_WEATHER_REASON)
        if base.crowd >= 8:
            reasons.append(UNCROWDED_REASON)

        return RankedRecommendation(
            city=city,
            period=RecommendedPeriod(start=week.start, end=week.end, label=week.label),
            score=round_half_up(
                base.total + exchange.amount + forecast.amount + season.amount + timeliness.amount
            ),
            base_score=base.total,
            bonuses=bonuses,
            reasons=tuple(reasons[: self._max_reasons]),
        )


def rank_today_best(
    today: date,
    cities: Sequence[City],
    base_scores: BaseScoreTable,
    exchange_history: Mapping[str, Sequence[ExchangeObservation]],
    seasons: Mapping[str, Sequence[Season]],
    forecast_cache: Mapping[str, ForecastSnapshot],
    now: Optional[datetime] = None,
) -> list[RankedRecommendation]:
    """Rank today's best timings with the reference analyzers and limits.

    Forecast freshness is judged against ``now``, or against the current UTC
    time when it is omitted. Everything else depends only on ``today`` and the
    datasets.
    """

    inputs = RankingInputs(
        base_scores=base_scores,
        exchange_history=exchange_history,
        seasons=seasons,
        forecast_cache=forecast_cache,
    )
    return RankTodayBestUseCase().execute(today, cities, inputs, now=now)


__all__ = ["RankTodayBestUseCase", "RankingInputs", "rank_today_best"]

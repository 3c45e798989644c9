"""Typed access to the YAML configuration and factories built from it."""
from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Mapping, TypedDict, cast

import yaml

from src.core.scoring import ScoreWeights, resolve_weights
from src.infrastructure.data import (
    BaseScoreCSVSource,
    CityCatalog,
    ExchangeHistoryCSVSource,
    FileSystemRankingRepository,
    ForecastCacheJSONSource,
    YAMLSeasonCalendarSource,
)
from src.infrastructure.timing import (
    BookingTimelinessAnalyzer,
    ExchangeTrendAnalyzer,
    ForecastFreshnessAnalyzer,
    SeasonProximityAnalyzer,
)
from src.infrastructure.timing.forecast import DEFAULT_HISTORICAL_CLEAR_RATIO
from src.use_cases.city_outlook import CityOutlookUseCase
from src.use_cases.gather_inputs import GatherInputsUseCase
from src.use_cases.rank_today_best import RankTodayBestUseCase


class PathsConfig(TypedDict, total=False):
    cities: str
    seasons: str
    base_scores: str
    exchange_rates: str
    forecast_cache: str
    rankings_dir: str


class WeightEntry(TypedDict, total=False):
    weather: float
    cost: float
    crowd: float
    buzz: float


class ScoringConfig(TypedDict, total=False):
    profile: str
    weight_profiles: dict[str, WeightEntry]


class RankingConfig(TypedDict, total=False):
    weeks: int
    top_n: int
    max_reasons: int


class ExchangeConfig(TypedDict, total=False):
    window_days: int
    recent_window_days: int
    min_observations: int
    tolerance: float


class ForecastConfig(TypedDict, total=False):
    freshness_hours: float
    default_historical_clear_ratio: float


class LoggingConfig(TypedDict, total=False):
    level: str


class AppConfig(TypedDict, total=False):
    paths: PathsConfig
    scoring: ScoringConfig
    ranking: RankingConfig
    exchange: ExchangeConfig
    forecast: ForecastConfig
    logging: LoggingConfig


_DEFAULT_PATHS: PathsConfig = {
    "cities": "configs/cities.yaml",
    "seasons": "configs/seasons.yaml",
    "base_scores": "data/processed/base_scores.csv",
    "exchange_rates": "data/processed/exchange_rates.csv",
    "forecast_cache": "data/cache/forecast_cache.json",
    "rankings_dir": "data/rankings",
}


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as file:
        data = yaml.safe_load(file) or {}

    if not isinstance(data, dict):
        raise ValueError("The configuration file must contain a mapping at the top level.")

    return cast(AppConfig, data)


def resolve_path(config: AppConfig, key: str, root: Path) -> Path:
    paths = cast(Mapping[str, str], config.get("paths", {}))
    path = Path(paths.get(key) or cast(Mapping[str, str], _DEFAULT_PATHS)[key])
    if path.is_absolute():
        return path
    return (root / path).resolve()


def build_weights(config: AppConfig) -> ScoreWeights:
    scoring = config.get("scoring", {})
    return resolve_weights(
        scoring.get("profile", "default"),
        cast(Mapping[str, Mapping[str, object]], scoring.get("weight_profiles") or {}),
    )


def build_catalog(config: AppConfig, root: Path) -> CityCatalog:
    return CityCatalog.from_yaml(resolve_path(config, "cities", root))


def build_gather_inputs(
    config: AppConfig,
    root: Path,
    today_provider: Callable[[], date] | None = None,
) -> GatherInputsUseCase:
    exchange = config.get("exchange", {})
    forecast = config.get("forecast", {})
    forecast_source = ForecastCacheJSONSource(
        resolve_path(config, "forecast_cache", root),
        default_historical_clear_ratio=float(
            forecast.get("default_historical_clear_ratio", DEFAULT_HISTORICAL_CLEAR_RATIO)
        ),
    )

    return GatherInputsUseCase(
        base_scores=BaseScoreCSVSource(
            resolve_path(config, "base_scores", root),
            weights=build_weights(config),
        ),
        exchange_history=ExchangeHistoryCSVSource(
            resolve_path(config, "exchange_rates", root),
            window_days=int(exchange.get("window_days", 90)),
            today_provider=today_provider,
        ),
        seasons=YAMLSeasonCalendarSource(resolve_path(config, "seasons", root)),
        forecast_cache=forecast_source,
    )


def build_rank_today_best(config: AppConfig) -> RankTodayBestUseCase:
    ranking = config.get("ranking", {})
    exchange = config.get("exchange", {})
    forecast = config.get("forecast", {})

    return RankTodayBestUseCase(
        exchange_analyzer=ExchangeTrendAnalyzer(
            window_days=int(exchange.get("window_days", 90)),
            recent_window_days=int(exchange.get("recent_window_days", 30)),
            min_observations=int(exchange.get("min_observations", 7)),
            tolerance=float(exchange.get("tolerance", 0.005)),
        ),
        forecast_analyzer=ForecastFreshnessAnalyzer(
            freshness_horizon=timedelta(hours=float(forecast.get("freshness_hours", 6))),
        ),
        season_analyzer=SeasonProximityAnalyzer(),
        timeliness_analyzer=BookingTimelinessAnalyzer(),
        weeks=int(ranking.get("weeks", 12)),
        top_n=int(ranking.get("top_n", 10)),
        max_reasons=int(ranking.get("max_reasons", 3)),
    )


def build_city_outlook(config: AppConfig, root: Path) -> CityOutlookUseCase:
    forecast = config.get("forecast", {})
    return CityOutlookUseCase(
        build_catalog(config, root),
        freshness=ForecastFreshnessAnalyzer(
            freshness_horizon=timedelta(hours=float(forecast.get("freshness_hours", 6))),
        ),
    )


def build_ranking_repository(config: AppConfig, root: Path) -> FileSystemRankingRepository:
    return FileSystemRankingRepository(resolve_path(config, "rankings_dir", root))


__all__ = [
    "AppConfig",
    "build_catalog",
    "build_city_outlook",
    "build_gather_inputs",
    "build_rank_today_best",
    "build_ranking_repository",
    "build_weights",
    "load_config",
    "resolve_path",
]

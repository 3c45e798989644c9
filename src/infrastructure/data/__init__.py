"""File-backed sources for the datasets consumed by the ranking engine."""

from .base_scores import BaseScoreCSVSource
from .catalog import CityCatalog
from .exchange_history import ExchangeHistoryCSVSource
from .forecast_cache import ForecastCacheJSONSource
from .rankings import FileSystemRankingRepository
from .season_calendar import YAMLSeasonCalendarSource

__all__ = [
    "BaseScoreCSVSource",
    "CityCatalog",
    "ExchangeHistoryCSVSource",
    "FileSystemRankingRepository",
    "ForecastCacheJSONSource",
    "YAMLSeasonCalendarSource",
]

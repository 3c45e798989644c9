"""Time-sensitive bonus analyzers for travel timing recommendations."""

from .booking import BookingTimelinessAnalyzer
from .exchange import ExchangeTrendAnalyzer
from .forecast import ForecastFreshnessAnalyzer
from .seasons import SeasonProximityAnalyzer
from .weeks import upcoming_weeks

__all__ = [
    "BookingTimelinessAnalyzer",
    "ExchangeTrendAnalyzer",
    "ForecastFreshnessAnalyzer",
    "SeasonProximityAnalyzer",
    "upcoming_weeks",
]

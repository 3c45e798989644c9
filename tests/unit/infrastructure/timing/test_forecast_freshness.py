"""Unit tests for forecast freshness gating and forecast comparisons."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.core.entities import ForecastSnapshot
from src.infrastructure.timing.forecast import (
    ForecastFreshnessAnalyzer,
    forecast_adjustment,
    forecast_comparison,
    summarise_forecast_days,
)

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def snapshot(clear_ratio: float, age: timedelta, historical: float = 0.6) -> ForecastSnapshot:
    return ForecastSnapshot(
        city_id="osaka",
        clear_ratio=clear_ratio,
        fetched_at=NOW - age,
        historical_clear_ratio=historical,
    )


def test_fresh_better_forecast_earns_scaled_bonus() -> None:
    cache = {"osaka": snapshot(0.72, timedelta(hours=2))}

    bonus = ForecastFreshnessAnalyzer().analyze("osaka", cache, now=NOW)

    assert bonus.amount == 0.4
    assert bonus.reason == "forecast shows 72% clear days"


def test_bonus_is_capped() -> None:
    cache = {"osaka": snapshot(1.0, timedelta(hours=1))}

    bonus = ForecastFreshnessAnalyzer().analyze("osaka", cache, now=NOW)

    assert bonus.amount == 0.5
    assert bonus.reason == "forecast shows 100% clear days"


def test_stale_forecast_is_ignored() -> None:
    cache = {"osaka": snapshot(1.0, timedelta(hours=6, minutes=1))}

    bonus = ForecastFreshnessAnalyzer().analyze("osaka", cache, now=NOW)

    assert bonus.amount == 0.0
    assert bonus.reason is None


def test_forecast_at_freshness_horizon_still_counts() -> None:
    cache = {"osaka": snapshot(1.0, timedelta(hours=6))}

    assert ForecastFreshnessAnalyzer().analyze("osaka", cache, now=NOW).amount == 0.5


def test_missing_or_unremarkable_forecast_gives_nothing() -> None:
    analyzer = ForecastFreshnessAnalyzer()

    assert analyzer.analyze("tokyo", {}, now=NOW).amount == 0.0
    cache = {"osaka": snapshot(0.65, timedelta(hours=1))}
    assert analyzer.analyze("osaka", cache, now=NOW).amount == 0.0


def test_naive_timestamps_are_treated_as_utc() -> None:
    naive = ForecastSnapshot("osaka", 1.0, datetime(2026, 10, 17, 10, 0), 0.6)
    analyzer = ForecastFreshnessAnalyzer(now_provider=lambda: NOW)

    assert analyzer.analyze("osaka", {"osaka": naive}).amount == 0.5


def test_summarise_forecast_days_counts_clear_codes() -> None:
    days = [
        {"date": "2026-10-17", "weather_code": 0},
        {"date": "2026-10-18", "weather_code": 2},
        {"date": "2026-10-19", "weather_code": 3},
        {"date": "2026-10-20", "weather_code": 61, "is_clear": True},
    ]

    result = summarise_forecast_days("osaka", days, NOW)

    assert result.clear_ratio == 0.75
    assert result.historical_clear_ratio == 0.6
    assert summarise_forecast_days("osaka", [], NOW).clear_ratio == 0.0


def test_forecast_adjustment_is_signed_and_capped() -> None:
    assert forecast_adjustment(0.72, 0.6) == 0.4
    assert forecast_adjustment(1.0, 0.5) == 0.5
    assert forecast_adjustment(0.3, 0.6) == -0.5
    assert forecast_adjustment(0.65, 0.6) == 0.0


def test_forecast_comparison_labels() -> None:
    better = forecast_comparison(snapshot(0.8, timedelta(0)))
    worse = forecast_comparison(snapshot(0.2, timedelta(0)))
    similar = forecast_comparison(snapshot(0.6, timedelta(0)))

    assert better.label == "better"
    assert better.text == "clear days 80% · better than the historical 60%"
    assert worse.label == "worse"
    assert worse.adjustment == -0.5
    assert similar.label == "similar"
    assert similar.adjustment == 0.0

"""Integration test for the city outlook script."""
from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path

import pandas as pd

from scripts.city_outlook import city_outlook
from src.infrastructure.config import AppConfig

ROOT = Path(__file__).resolve().parents[2]
TODAY = date(2026, 10, 17)
NOW = datetime(2026, 10, 17, 7, 0, tzinfo=timezone.utc)


def write_inputs(tmp_path: Path) -> AppConfig:
    rows = [
        {"city_id": "osaka", "month": month, "weather": value, "cost": value, "crowd": value, "buzz": value}
        for month, value in ((4, 9.0), (10, 7.0), (11, 8.0))
    ]
    pd.DataFrame(rows).to_csv(tmp_path / "base_scores.csv", index=False)

    cache = {
        "osaka": {
            "fetched_at": "2026-10-17T05:00:00Z",
            "historical_clear_ratio": 0.6,
            "days": [{"weather_code": code} for code in (0, 1, 2, 3, 0)],
        },
        "paris": {"fetched_at": "2026-10-16T05:00:00Z", "clear_ratio": 1.0},
    }
    (tmp_path / "forecast_cache.json").write_text(json.dumps(cache), encoding="utf-8")

    return {
        "paths": {
            "cities": str(ROOT / "configs" / "cities.yaml"),
            "seasons": str(ROOT / "configs" / "seasons.yaml"),
            "base_scores": "base_scores.csv",
            "exchange_rates": "missing_rates.csv",
            "forecast_cache": "forecast_cache.json",
        },
    }


def test_city_outlook_with_fresh_forecast(tmp_path: Path) -> None:
    config = write_inputs(tmp_path)

    outlook = city_outlook(config, "osaka", TODAY, include_forecast=True, now=NOW, root=tmp_path)

    assert outlook.best_month == 4
    assert outlook.current_score == 7.0
    assert outlook.forecast is not None
    assert outlook.forecast.label == "better"
    assert outlook.forecast.text == "clear days 80% · better than the historical 60%"


def test_city_outlook_skips_forecast_unless_requested(tmp_path: Path) -> None:
    config = write_inputs(tmp_path)

    outlook = city_outlook(config, "osaka", TODAY, now=NOW, root=tmp_path)

    assert outlook.forecast is None


def test_city_outlook_leaves_out_stale_forecast(tmp_path: Path) -> None:
    config = write_inputs(tmp_path)

    outlook = city_outlook(config, "paris", TODAY, include_forecast=True, now=NOW, root=tmp_path)

    assert outlook.monthly_scores == ()
    assert outlook.forecast is None

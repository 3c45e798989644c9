"""Print the month-by-month outlook of one destination."""
from __future__ import annotations

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from src.infrastructure.config import (
    AppConfig,
    build_city_outlook,
    build_gather_inputs,
    load_config,
)
from src.use_cases.city_outlook import CityOutlook
from src.utils.logger import configure_logging, logger

_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def city_outlook(
    config: AppConfig,
    city_id: str,
    today: date,
    include_forecast: bool = False,
    now: datetime | None = None,
    root: Path = _PROJECT_ROOT,
) -> CityOutlook:
    inputs = build_gather_inputs(config, root, today_provider=lambda: today).execute().inputs
    forecast_cache = inputs.forecast_cache if include_forecast else None
    return build_city_outlook(config, root).execute(
        city_id, inputs.base_scores, today, forecast_cache=forecast_cache, now=now
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the yearly outlook of a destination")
    parser.add_argument("city_id", help="City identifier, e.g. osaka")
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD)")
    parser.add_argument(
        "--forecast",
        action="store_true",
        help="Compare the cached forecast against the climate norm",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    configure_logging(config.get("logging", {}).get("level", "INFO"))

    outlook = city_outlook(config, args.city_id, args.date or date.today(), args.forecast)
    for month, breakdown in outlook.monthly_scores:
        logger.info("{:>2}: {} ({})", month, breakdown.total, breakdown.grade.value)
    logger.info("Best month for {}: {} ({})", outlook.city.name, outlook.best_month, outlook.best_score)
    logger.info("This month ({}): {}", outlook.current_month, outlook.current_score)
    if args.forecast:
        if outlook.forecast is None:
            logger.info("No fresh forecast available")
        else:
            logger.info("Forecast: {}", outlook.forecast.text)


if __name__ == "__main__":
    main()

"""Compute today's best travel timings and store the ranking snapshot."""
from __future__ import annotations

import argparse
import sys
from datetime import date, datetime, timezone
from pathlib import Path

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from src.core.entities import RankedRecommendation, RankingSnapshot
from src.infrastructure.config import (
    AppConfig,
    build_catalog,
    build_gather_inputs,
    build_rank_today_best,
    build_ranking_repository,
    load_config,
)
from src.utils.logger import configure_logging, logger

_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def calculate_today_best(
    config: AppConfig,
    today: date,
    now: datetime | None = None,
    root: Path = _PROJECT_ROOT,
) -> RankingSnapshot:
    generated_at = now or datetime.now(timezone.utc)
    catalog = build_catalog(config, root)
    gathered = build_gather_inputs(config, root, today_provider=lambda: today).execute()
    if gathered.degraded:
        logger.warning("Ranking on partial data; see the dataset warnings above")

    rankings = build_rank_today_best(config).execute(
        today, catalog.cities, gathered.inputs, now=generated_at
    )
    for item in rankings:
        _log_recommendation(item)

    snapshot = RankingSnapshot(
        evaluation_date=today,
        generated_at=generated_at,
        rankings=tuple(rankings),
    )
    build_ranking_repository(config, root).save(snapshot)
    return snapshot


def _log_recommendation(item: RankedRecommendation) -> None:
    logger.info(
        "{}. {} · {} · {} (base {} + bonuses {:.1f}) [{}]",
        item.rank,
        item.city.name,
        item.period.label,
        item.score,
        item.base_score,
        item.bonuses.total,
        item.grade.value,
    )
    if item.reasons:
        logger.info("   {}", " | ".join(item.reasons))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank the best travel timings for today")
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Evaluation date (YYYY-MM-DD); defaults to today",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    configure_logging(config.get("logging", {}).get("level", "INFO"))
    snapshot = calculate_today_best(config, args.date or date.today())
    if not snapshot.rankings:
        logger.warning("No qualifying candidates for {}", snapshot.evaluation_date)


if __name__ == "__main__":
    main()

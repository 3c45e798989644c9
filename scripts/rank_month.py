"""Print the destination ranking for one travel month."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT = Path(__file__).resolve().parents[1]
    _SCRIPT_PARENT_STR = str(_SCRIPT_PARENT)
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from src.infrastructure.config import build_catalog, build_gather_inputs, load_config
from src.use_cases.rank_month import RankMonthUseCase
from src.utils.logger import configure_logging, logger

_PROJECT_ROOT = Path(__file__).resolve().parents[1]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank destinations for a travel month")
    parser.add_argument("month", type=int, help="Month number (1-12)")
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = load_config(args.config)
    configure_logging(config.get("logging", {}).get("level", "INFO"))

    catalog = build_catalog(config, _PROJECT_ROOT)
    inputs = build_gather_inputs(config, _PROJECT_ROOT).execute().inputs
    rankings = RankMonthUseCase().execute(
        args.month, catalog.cities, inputs.base_scores, inputs.seasons
    )
    for entry in rankings:
        logger.info(
            "{}. {} {} ({}) {}",
            entry.rank,
            entry.city.name,
            entry.scores.total,
            entry.grade.value,
            ", ".join(entry.highlights),
        )


if __name__ == "__main__":
    main()

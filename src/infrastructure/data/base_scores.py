"""CSV-backed table of monthly base score breakdowns."""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from src.core.scoring import DEFAULT_WEIGHTS, ScoreBreakdown, ScoreWeights
from src.utils.logger import logger

_REQUIRED_COLUMNS = {"city_id", "month", "weather", "cost", "crowd", "buzz"}


class BaseScoreCSVSource:
    """Load ``(city_id, month) -> ScoreBreakdown`` from a CSV export.

    Totals present in the file are ignored and recomputed from the sub-scores
    with the configured weights.
    """

    def __init__(self, csv_path: str | Path, weights: ScoreWeights = DEFAULT_WEIGHTS) -> None:
        self._csv_path = Path(csv_path)
        self._weights = weights

    def load(self) -> dict[tuple[str, int], ScoreBreakdown]:
        if not self._csv_path.exists():
            raise FileNotFoundError(f"Base score table not found: {self._csv_path}")

        data = pd.read_csv(self._csv_path)
        missing = _REQUIRED_COLUMNS - set(data.columns)
        if missing:
            raise ValueError("Base score table is missing columns: " + ", ".join(sorted(missing)))

        data = data.dropna(subset=sorted(_REQUIRED_COLUMNS))
        table: dict[tuple[str, int], ScoreBreakdown] = {}
        for row in data.itertuples(index=False):
            month = int(row.month)
            if not 1 <= month <= 12:
                logger.warning("Skipping base score for {} with invalid month {}", row.city_id, month)
                continue
            table[(str(row.city_id), month)] = ScoreBreakdown.build(
                weather=float(row.weather),
                cost=float(row.cost),
                crowd=float(row.crowd),
                buzz=float(row.buzz),
                weights=self._weights,
            )

        logger.info("Loaded {} base scores from {}", len(table), self._csv_path)
        return table


__all__ = ["BaseScoreCSVSource"]

"""Use case ranking destinations for a chosen travel month."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from src.core.entities import City, Season
from src.core.scoring import ScoreBreakdown, ScoreGrade
from src.infrastructure.explanations.highlights import generate_highlights
from src.infrastructure.timing.seasons import seasons_overlapping_month
from src.utils.logger import logger


@dataclass(frozen=True)
class MonthRanking:
    rank: int
    city: City
    scores: ScoreBreakdown
    grade: ScoreGrade
    highlights: tuple[str, ...]


class RankMonthUseCase:
    """Order cities by their base total for one month, best first."""

    def execute(
        self,
        month: int,
        cities: Sequence[City],
        base_scores: Mapping[tuple[str, int], ScoreBreakdown],
        seasons: Mapping[str, Sequence[Season]] | None = None,
    ) -> list[MonthRanking]:
        if not 1 <= int(month) <= 12:
            raise ValueError(f"Invalid month: {month}. Must be an integer between 1 and 12.")

        available = [
            (city, base_scores[(city.id, month)])
            for city in cities
            if (city.id, month) in base_scores
        ]
        available.sort(key=lambda pair: pair[1].total, reverse=True)
        logger.info("Ranking {} cities for month {}", len(available), month)

        rankings: list[MonthRanking] = []
        for index, (city, breakdown) in enumerate(available):
            overlapping = seasons_overlapping_month((seasons or {}).get(city.id, ()), month)
            season_name = overlapping[0].name if overlapping else None
            rankings.append(
                MonthRanking(
                    rank=index + 1,
                    city=city,
                    scores=breakdown,
                    grade=breakdown.grade,
                    highlights=tuple(generate_highlights(breakdown, season_name)),
                )
            )
        return rankings


__all__ = ["MonthRanking", "RankMonthUseCase"]

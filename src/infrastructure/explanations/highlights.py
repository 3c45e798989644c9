"""Short human-readable tags summarising a monthly score breakdown."""
from __future__ import annotations

from typing import Optional

from src.core.scoring import ScoreBreakdown

MAX_HIGHLIGHTS = 3
_HIGH = 8.0
_LOW = 3.0
_STRONG_TOTAL = 8.5


def generate_highlights(breakdown: ScoreBreakdown, season_name: Optional[str] = None) -> list[str]:
    """Return up to three tags, season first, then sub-score and total driven tags."""

    highlights: list[str] = []
    if season_name:
        highlights.append(season_name)

    if breakdown.weather >= _HIGH:
        # The season tag already implies good conditions.
        if not season_name:
            highlights.append("ideal weather")
    elif breakdown.weather <= _LOW:
        highlights.append("poor weather")

    if breakdown.cost >= _HIGH:
        highlights.append("favourable exchange rate")
    elif breakdown.cost <= _LOW:
        highlights.append("high prices")

    if breakdown.crowd >= _HIGH:
        highlights.append("off-peak, uncrowded")
    elif breakdown.crowd <= _LOW:
        highlights.append("peak-season crowds")

    if breakdown.buzz >= _HIGH:
        highlights.append("trending on social media")

    if breakdown.total >= _STRONG_TOTAL and len(highlights) < MAX_HIGHLIGHTS:
        highlights.append("strongly recommended")

    return highlights[:MAX_HIGHLIGHTS]


__all__ = ["MAX_HIGHLIGHTS", "generate_highlights"]

"""Unit tests for the month ranking use case and its highlights."""
from __future__ import annotations

import pytest

from src.core.entities import City, Season
from src.core.scoring import ScoreBreakdown, ScoreGrade
from src.infrastructure.explanations.highlights import generate_highlights
from src.use_cases.rank_month import RankMonthUseCase


def make_city(city_id: str) -> City:
    return City(city_id, city_id.title(), "Testland", "TL", "USD", 0.0, 0.0)


def test_cities_are_ranked_by_total_with_highlights() -> None:
    cities = [make_city("osaka"), make_city("paris"), make_city("london")]
    base_scores = {
        ("osaka", 4): ScoreBreakdown.build(9.0, 9.0, 9.0, 9.0),
        ("paris", 4): ScoreBreakdown.build(5.0, 2.0, 5.0, 5.0),
        ("london", 5): ScoreBreakdown.build(9.0, 9.0, 9.0, 9.0),
    }
    seasons = {"osaka": (Season("osaka", "Cherry blossom season", 3, 20, 4, 15),)}

    rankings = RankMonthUseCase().execute(4, cities, base_scores, seasons)

    assert [entry.city.id for entry in rankings] == ["osaka", "paris"]
    assert [entry.rank for entry in rankings] == [1, 2]
    assert rankings[0].grade is ScoreGrade.BEST
    assert rankings[0].highlights == (
        "Cherry blossom season",
        "favourable exchange rate",
        "off-peak, uncrowded",
    )
    assert rankings[1].grade is ScoreGrade.AVERAGE
    assert rankings[1].highlights == ("high prices",)


def test_invalid_month_is_rejected() -> None:
    with pytest.raises(ValueError):
        RankMonthUseCase().execute(13, [], {})


def test_highlights_without_season() -> None:
    excellent = ScoreBreakdown.build(9.0, 5.0, 5.0, 9.0)
    poor = ScoreBreakdown.build(2.0, 5.0, 2.0, 5.0)

    assert generate_highlights(excellent) == ["ideal weather", "trending on social media"]
    assert generate_highlights(poor) == ["poor weather", "peak-season crowds"]


def test_highlights_add_strong_recommendation_when_room_remains() -> None:
    breakdown = ScoreBreakdown.build(9.0, 9.0, 7.0, 9.0)

    assert generate_highlights(breakdown) == [
        "ideal weather",
        "favourable exchange rate",
        "trending on social media",
    ]
    assert generate_highlights(ScoreBreakdown.build(10.0, 8.5, 7.0, 7.5)) == [
        "ideal weather",
        "favourable exchange rate",
        "strongly recommended",
    ]

"""Unit tests for composite scoring and grading."""
from __future__ import annotations

import itertools

import pytest

from src.core.scoring import (
    DEFAULT_WEIGHTS,
    ScoreBreakdown,
    ScoreGrade,
    ScoreWeights,
    WEIGHT_PROFILES,
    grade,
    resolve_weights,
    round_half_up,
    score,
)


def test_score_matches_weighted_example() -> None:
    total = score(weather=9.0, cost=7.0, crowd=8.0, buzz=6.0)

    assert total == 7.6
    assert grade(total) is ScoreGrade.GOOD


def test_score_clamps_out_of_range_subscores() -> None:
    assert score(weather=15.0, cost=12.0, crowd=10.0, buzz=11.0) == 10.0
    assert score(weather=-3.0, cost=0.0, crowd=0.5, buzz=1.0) == 1.0


def test_score_stays_within_range_for_all_profiles() -> None:
    values = (1.0, 3.3, 5.5, 7.7, 10.0)
    for weights in WEIGHT_PROFILES.values():
        for combo in itertools.product(values, repeat=4):
            total = score(*combo, weights=weights)
            expected = round_half_up(
                weights.weather * combo[0]
                + weights.cost * combo[1]
                + weights.crowd * combo[2]
                + weights.buzz * combo[3]
            )
            assert total == expected
            assert 1.0 <= total <= 10.0


@pytest.mark.parametrize(
    ("total", "expected"),
    [
        (10.0, ScoreGrade.BEST),
        (8.0, ScoreGrade.BEST),
        (7.9, ScoreGrade.GOOD),
        (6.0, ScoreGrade.GOOD),
        (5.9, ScoreGrade.AVERAGE),
        (4.0, ScoreGrade.AVERAGE),
        (3.9, ScoreGrade.POOR),
        (1.0, ScoreGrade.POOR),
    ],
)
def test_grade_boundaries_belong_to_higher_grade(total: float, expected: ScoreGrade) -> None:
    assert grade(total) is expected


def test_grade_is_monotonic() -> None:
    totals = [value / 10 for value in range(10, 101)]
    levels = [grade(total).level for total in totals]

    assert levels == sorted(levels)


def test_round_half_up_differs_from_bankers_rounding() -> None:
    assert round_half_up(7.25) == 7.3
    assert round_half_up(0.45, 1) == 0.5
    assert round_half_up(-0.25) == -0.3


def test_breakdown_total_is_derived_from_subscores() -> None:
    breakdown = ScoreBreakdown.build(weather=9.0, cost=7.0, crowd=8.0, buzz=6.0)

    assert breakdown.total == 7.6
    assert breakdown.grade is ScoreGrade.GOOD


def test_breakdown_uses_alternate_weights() -> None:
    budget = WEIGHT_PROFILES["budget"]
    breakdown = ScoreBreakdown.build(weather=4.0, cost=10.0, crowd=4.0, buzz=4.0, weights=budget)

    assert breakdown.total == 6.7


def test_weights_validation_rejects_bad_profiles() -> None:
    with pytest.raises(ValueError):
        ScoreWeights(weather=0.5, cost=0.5, crowd=0.5, buzz=0.0).validate()
    with pytest.raises(ValueError):
        ScoreWeights(weather=1.2, cost=-0.2, crowd=0.0, buzz=0.0).validate()


def test_resolve_weights_supports_configured_profiles() -> None:
    extra = {"custom": {"weather": 0.25, "cost": 0.25, "crowd": 0.25, "buzz": 0.25}}

    assert resolve_weights() == DEFAULT_WEIGHTS
    assert resolve_weights("custom", extra) == ScoreWeights(0.25, 0.25, 0.25, 0.25)
    with pytest.raises(ValueError):
        resolve_weights("missing")
    with pytest.raises(ValueError):
        resolve_weights("broken", {"broken": {"weather": 1.0}})

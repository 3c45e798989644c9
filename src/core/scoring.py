"""Composite score calculation and grading for (city, month) breakdowns."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

MIN_SUBSCORE = 1.0
MAX_SUBSCORE = 10.0

_WEIGHT_TOLERANCE = 1e-6


def round_half_up(value: float, digits: int = 1) -> float:
    """Round ``value`` half away from zero, unlike the builtin banker's rounding."""

    factor = 10**digits
    if value < 0:
        return -math.floor(-value * factor + 0.5) / factor
    return math.floor(value * factor + 0.5) / factor


def clamp_subscore(value: float) -> float:
    return min(MAX_SUBSCORE, max(MIN_SUBSCORE, float(value)))


@dataclass(frozen=True)
class ScoreWeights:
    """Relative importance of each sub-score in the composite total."""

    weather: float = 0.35
    cost: float = 0.25
    crowd: float = 0.15
    buzz: float = 0.25

    def validate(self) -> "ScoreWeights":
        values = (self.weather, self.cost, self.crowd, self.buzz)
        if any(value < 0 for value in values):
            raise ValueError(f"Score weights must be non-negative: {self}")
        if abs(sum(values) - 1.0) > _WEIGHT_TOLERANCE:
            raise ValueError(f"Score weights must sum to 1.0, got {sum(values):.4f}")
        return self

    @classmethod
    def from_config(cls, entry: Mapping[str, object]) -> "ScoreWeights":
        try:
            weights = cls(
                weather=float(entry["weather"]),  # type: ignore[arg-type]
                cost=float(entry["cost"]),  # type: ignore[arg-type]
                crowd=float(entry["crowd"]),  # type: ignore[arg-type]
                buzz=float(entry["buzz"]),  # type: ignore[arg-type]
            )
        except KeyError as exc:
            raise ValueError(f"Weight profile is missing the {exc.args[0]!r} weight.") from exc
        return weights.validate()


DEFAULT_WEIGHTS = ScoreWeights()

WEIGHT_PROFILES: Mapping[str, ScoreWeights] = {
    "default": DEFAULT_WEIGHTS,
    "budget": ScoreWeights(weather=0.25, cost=0.45, crowd=0.10, buzz=0.20),
    "weather_first": ScoreWeights(weather=0.50, cost=0.20, crowd=0.15, buzz=0.15),
}


class ScoreGrade(str, Enum):
    """Qualitative bucket for a composite total, ordered poor < average < good < best."""

    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    BEST = "best"

    @property
    def level(self) -> int:
        return _GRADE_LEVELS[self]


_GRADE_LEVELS = {
    ScoreGrade.POOR: 0,
    ScoreGrade.AVERAGE: 1,
    ScoreGrade.GOOD: 2,
    ScoreGrade.BEST: 3,
}

_GRADE_THRESHOLDS: tuple[tuple[float, ScoreGrade], ...] = (
    (8.0, ScoreGrade.BEST),
    (6.0, ScoreGrade.GOOD),
    (4.0, ScoreGrade.AVERAGE),
)


def score(
    weather: float,
    cost: float,
    crowd: float,
    buzz: float,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> float:
    """Return the weighted composite of the four sub-scores, rounded to one decimal.

    Sub-scores are clamped into ``[1.0, 10.0]`` before weighting so the total
    stays inside the same range whenever the weights sum to one.
    """

    total = (
        weights.weather * clamp_subscore(weather)
        + weights.cost * clamp_subscore(cost)
        + weights.crowd * clamp_subscore(crowd)
        + weights.buzz * clamp_subscore(buzz)
    )
    return round_half_up(total)


def grade(total: float) -> ScoreGrade:
    for threshold, label in _GRADE_THRESHOLDS:
        if total >= threshold:
            return label
    return ScoreGrade.POOR


@dataclass(frozen=True)
class ScoreBreakdown:
    """Four sub-scores and their derived weighted total.

    Instances should be created through :meth:`build` so that ``total`` is always
    derived from the sub-scores instead of being set independently.
    """

    weather: float
    cost: float
    crowd: float
    buzz: float
    total: float

    @classmethod
    def build(
        cls,
        weather: float,
        cost: float,
        crowd: float,
        buzz: float,
        weights: ScoreWeights = DEFAULT_WEIGHTS,
    ) -> "ScoreBreakdown":
        return cls(
            weather=clamp_subscore(weather),
            cost=clamp_subscore(cost),
            crowd=clamp_subscore(crowd),
            buzz=clamp_subscore(buzz),
            total=score(weather, cost, crowd, buzz, weights),
        )

    @property
    def grade(self) -> ScoreGrade:
        return grade(self.total)


def resolve_weights(
    profile: str = "default",
    extra_profiles: Mapping[str, Mapping[str, object]] | None = None,
) -> ScoreWeights:
    """Look up a named weight profile, including profiles declared in configuration."""

    profiles: dict[str, ScoreWeights] = dict(WEIGHT_PROFILES)
    for name, entry in (extra_profiles or {}).items():
        profiles[str(name)] = ScoreWeights.from_config(entry)

    if profile not in profiles:
        available = ", ".join(sorted(profiles))
        raise ValueError(f"Unknown weight profile '{profile}'. Available profiles: {available}.")
    return profiles[profile]


__all__ = [
    "DEFAULT_WEIGHTS",
    "MAX_SUBSCORE",
    "MIN_SUBSCORE",
    "ScoreBreakdown",
    "ScoreGrade",
    "ScoreWeights",
    "WEIGHT_PROFILES",
    "clamp_subscore",
    "grade",
    "resolve_weights",
    "round_half_up",
    "score",
]

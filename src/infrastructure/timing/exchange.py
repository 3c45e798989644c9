"""Exchange-rate trend detection for cost-timing bonuses."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

import pandas as pd

from src.core.entities import Bonus, ExchangeObservation
from src.utils.logger import logger

THREE_MONTH_LOW_REASON = "currency at 3-month low"
ONE_MONTH_LOW_REASON = "currency at 1-month low"


class ExchangeTrendAnalyzer:
    """Reward currencies trading at or near a short or medium term low.

    Rates are expressed as local-currency units per unit of the destination
    currency, so a lower rate makes the trip cheaper.
    """

    def __init__(
        self,
        window_days: int = 90,
        recent_window_days: int = 30,
        min_observations: int = 7,
        tolerance: float = 0.005,
        low_bonus: float = 1.0,
        recent_low_bonus: float = 0.5,
    ) -> None:
        if recent_window_days > window_days:
            raise ValueError("The recent window cannot be longer than the full window.")
        self._window = timedelta(days=window_days)
        self._recent_window = timedelta(days=recent_window_days)
        self._min_observations = min_observations
        self._tolerance = tolerance
        self._low_bonus = low_bonus
        self._recent_low_bonus = recent_low_bonus

    def analyze(
        self,
        currency: str,
        observations: Sequence[ExchangeObservation],
        as_of: Optional[date] = None,
    ) -> Bonus:
        series = self._to_series(observations, as_of)
        if series.empty:
            return Bonus.none()

        end = as_of or series.index[-1].date()
        window = series[series.index >= pd.Timestamp(end - self._window)]
        if len(window) < self._min_observations:
            logger.debug(
                "Only {} observations for {}; skipping exchange bonus",
                len(window),
                currency,
            )
            return Bonus.none()

        recent = window[window.index >= pd.Timestamp(end - self._recent_window)]
        if recent.empty:
            logger.debug("No recent quotes for {}; skipping exchange bonus", currency)
            return Bonus.none()

        current = float(window.iloc[-1])
        low = float(window.min())
        recent_low = float(recent.min())

        if current <= low * (1 + self._tolerance):
            logger.debug("{} at {} is within range of the window low {}", currency, current, low)
            return Bonus(self._low_bonus, THREE_MONTH_LOW_REASON)
        if current <= recent_low * (1 + self._tolerance):
            logger.debug(
                "{} at {} is within range of the recent low {}", currency, current, recent_low
            )
            return Bonus(self._recent_low_bonus, ONE_MONTH_LOW_REASON)
        return Bonus.none()

    @staticmethod
    def _to_series(
        observations: Sequence[ExchangeObservation], as_of: Optional[date]
    ) -> pd.Series:
        if not observations:
            return pd.Series(dtype=float)

        series = pd.Series(
            [float(item.rate) for item in observations],
            index=pd.to_datetime([item.rate_date for item in observations]),
            dtype=float,
        ).sort_index(kind="stable")
        series = series.dropna()
        if as_of is not None:
            series = series[series.index <= pd.Timestamp(as_of)]
        return series


__all__ = ["ExchangeTrendAnalyzer", "ONE_MONTH_LOW_REASON", "THREE_MONTH_LOW_REASON"]

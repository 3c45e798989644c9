"""CSV-backed daily exchange-rate history."""
from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path
from typing import Callable

import pandas as pd

from src.core.entities import ExchangeObservation
from src.utils.logger import logger

_REQUIRED_COLUMNS = {"currency", "rate_date", "rate"}


class ExchangeHistoryCSVSource:
    """Load the trailing window of rate observations, grouped by currency."""

    def __init__(
        self,
        csv_path: str | Path,
        window_days: int = 90,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._csv_path = Path(csv_path)
        self._window_days = window_days
        self._today_provider = today_provider or date.today

    def load(self) -> dict[str, tuple[ExchangeObservation, ...]]:
        if not self._csv_path.exists():
            raise FileNotFoundError(f"Exchange history not found: {self._csv_path}")

        data = pd.read_csv(self._csv_path)
        missing = _REQUIRED_COLUMNS - set(data.columns)
        if missing:
            raise ValueError("Exchange history is missing columns: " + ", ".join(sorted(missing)))

        data = data.assign(
            currency=data["currency"].astype(str).str.upper().str.strip(),
            rate_date=pd.to_datetime(data["rate_date"], errors="coerce"),
            rate=pd.to_numeric(data["rate"], errors="coerce"),
        )
        invalid = data["rate_date"].isna() | data["rate"].isna()
        if invalid.any():
            logger.warning("Dropping {} unparsable exchange rows", int(invalid.sum()))
            data = data[~invalid]

        cutoff = pd.Timestamp(self._today_provider() - timedelta(days=self._window_days))
        data = data[data["rate_date"] >= cutoff].sort_values(["currency", "rate_date"], kind="stable")

        history: dict[str, tuple[ExchangeObservation, ...]] = {}
        for currency, group in data.groupby("currency", sort=True):
            history[str(currency)] = tuple(
                ExchangeObservation(rate_date=stamp.date(), rate=float(rate))
                for stamp, rate in zip(group["rate_date"], group["rate"])
            )

        logger.info("Loaded exchange history for {} currencies", len(history))
        return history


__all__ = ["ExchangeHistoryCSVSource"]

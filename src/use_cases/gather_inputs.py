"""Use case loading the ranking datasets concurrently with graceful degradation."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol

from src.use_cases.rank_today_best import RankingInputs
from src.utils.logger import logger


class DatasetSource(Protocol):
    def load(self) -> Mapping[Any, Any]:
        ...


class SourceStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceResult:
    """Outcome of loading one dataset."""

    name: str
    status: SourceStatus
    data: Mapping[Any, Any]
    error: Optional[str] = None


@dataclass(frozen=True)
class GatheredInputs:
    inputs: RankingInputs
    results: Mapping[str, SourceResult]

    @property
    def degraded(self) -> bool:
        return any(result.status is SourceStatus.FAILED for result in self.results.values())


class GatherInputsUseCase:
    """Fetch base scores, exchange history, seasons and forecasts in parallel.

    The sources are independent and read-only. A failing source is logged and
    replaced by an empty dataset so that ranking still runs on partial data.
    """

    def __init__(
        self,
        base_scores: DatasetSource,
        exchange_history: DatasetSource,
        seasons: DatasetSource,
        forecast_cache: DatasetSource,
        max_workers: int = 4,
    ) -> None:
        self._sources: dict[str, DatasetSource] = {
            "base_scores": base_scores,
            "exchange_history": exchange_history,
            "seasons": seasons,
            "forecast_cache": forecast_cache,
        }
        self._max_workers = max_workers

    def execute(self) -> GatheredInputs:
        logger.info("Gathering {} ranking datasets", len(self._sources))
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            futures = {
                name: executor.submit(self._load, name, source)
                for name, source in self._sources.items()
            }
            results = {name: future.result() for name, future in futures.items()}

        inputs = RankingInputs(
            base_scores=results["base_scores"].data,
            exchange_history=results["exchange_history"].data,
            seasons=results["seasons"].data,
            forecast_cache=results["forecast_cache"].data,
        )
        return GatheredInputs(inputs=inputs, results=results)

    @staticmethod
    def _load(name: str, source: DatasetSource) -> SourceResult:
        try:
            data = source.load()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Dataset '{}' unavailable, continuing without it: {}", name, exc)
            return SourceResult(name=name, status=SourceStatus.FAILED, data={}, error=str(exc))

        if not data:
            logger.warning("Dataset '{}' is empty", name)
            return SourceResult(name=name, status=SourceStatus.EMPTY, data={})

        logger.debug("Dataset '{}' loaded with {} entries", name, len(data))
        return SourceResult(name=name, status=SourceStatus.OK, data=data)


__all__ = [
    "DatasetSource",
    "GatherInputsUseCase",
    "GatheredInputs",
    "SourceResult",
    "SourceStatus",
]

"""Filesystem persistence for daily ranking snapshots."""
from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from src.core.entities import RankedRecommendation, RankingSnapshot
from src.utils.logger import logger


class FileSystemRankingRepository:
    """Store one JSON document per evaluation date."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, evaluation_date: date) -> Path:
        return self._directory / f"{evaluation_date.isoformat()}.json"

    def save(self, snapshot: RankingSnapshot) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(snapshot.evaluation_date)
        document = {
            "date": snapshot.evaluation_date.isoformat(),
            "generated_at": snapshot.generated_at.isoformat(),
            "rankings": [item.to_dict() for item in snapshot.rankings],
        }
        path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info("Saved {} rankings to {}", len(snapshot.rankings), path)
        return path

    def load(self, evaluation_date: date) -> Optional[RankingSnapshot]:
        path = self.path_for(evaluation_date)
        if not path.exists():
            return None

        document = json.loads(path.read_text(encoding="utf-8"))
        return RankingSnapshot(
            evaluation_date=date.fromisoformat(document["date"]),
            generated_at=datetime.fromisoformat(document["generated_at"]),
            rankings=tuple(RankedRecommendation.from_dict(item) for item in document["rankings"]),
        )


__all__ = ["FileSystemRankingRepository"]

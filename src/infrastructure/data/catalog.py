"""YAML-backed city catalog."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import yaml

from src.core.entities import City
from src.utils.logger import logger


def _city_from_entry(entry: Mapping[str, Any]) -> City:
    missing = {"id", "name", "country", "country_code", "currency", "latitude", "longitude"} - set(entry)
    if missing:
        raise ValueError(
            f"City entry {entry.get('id', '<unknown>')!r} is missing: " + ", ".join(sorted(missing))
        )
    return City(
        id=str(entry["id"]),
        name=str(entry["name"]),
        local_name=str(entry["local_name"]) if entry.get("local_name") else None,
        country=str(entry["country"]),
        country_code=str(entry["country_code"]).upper(),
        currency=str(entry["currency"]).upper(),
        latitude=float(entry["latitude"]),
        longitude=float(entry["longitude"]),
        keywords=tuple(str(keyword) for keyword in entry.get("keywords") or ()),
    )


class CityCatalog:
    """Ordered, read-only collection of destination cities."""

    def __init__(self, cities: Sequence[City]) -> None:
        self._cities: tuple[City, ...] = tuple(cities)
        self._by_id = {city.id: city for city in self._cities}
        if len(self._by_id) != len(self._cities):
            raise ValueError("City identifiers in the catalog must be unique.")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CityCatalog":
        catalog_path = Path(path)
        if not catalog_path.exists():
            raise FileNotFoundError(f"City catalog not found: {catalog_path}")

        with catalog_path.open("r", encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}

        entries = data.get("cities", []) if isinstance(data, dict) else data
        cities = [_city_from_entry(entry) for entry in entries]
        logger.info("Loaded {} cities from {}", len(cities), catalog_path)
        return cls(cities)

    def __iter__(self) -> Iterator[City]:
        return iter(self._cities)

    def __len__(self) -> int:
        return len(self._cities)

    @property
    def cities(self) -> tuple[City, ...]:
        return self._cities

    def get(self, city_id: str) -> City:
        try:
            return self._by_id[city_id]
        except KeyError:
            raise KeyError(f"City not found: {city_id}") from None

    def search(self, query: str | None = None) -> list[City]:
        if not query or not query.strip():
            return list(self._cities)

        needle = query.strip().lower()
        results: list[City] = []
        for city in self._cities:
            haystack = [city.id, city.name, city.country, city.local_name or "", *city.keywords]
            if any(needle in value.lower() for value in haystack):
                results.append(city)
        return results


__all__ = ["CityCatalog"]

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias, Union

import polars as pl


@dataclass(frozen=True, slots=True)
class RecruiterKey:
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None

    def __post_init__(self) -> None:
        for field_name in ("first_name", "last_name", "company_name"):
            value = getattr(self, field_name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{field_name} must be str | None")

    def sort_key(self) -> tuple[tuple[bool, str], ...]:
        # None sorts before any string, including "".
        return tuple(
            (value is not None, value or "")
            for value in (self.first_name, self.last_name, self.company_name)
        )

    def to_dict(self) -> dict[str, str | None]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "company_name": self.company_name,
        }


StatKey: TypeAlias = Union[str, RecruiterKey]


def stat_key_to_json(key: StatKey) -> Any:
    if isinstance(key, RecruiterKey):
        return key.to_dict()
    return key


@dataclass(frozen=True, slots=True)
class HistogramEntry:
    key: StatKey
    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count must be >= 0")

    def to_dict(self) -> dict[str, Any]:
        return {"key": stat_key_to_json(self.key), "count": int(self.count)}


@dataclass(frozen=True, slots=True)
class SalarySummary:
    min: float | None
    max: float | None
    average: float | None
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "max": self.max,
            "average": self.average,
            "count": int(self.count),
        }


@dataclass(frozen=True, slots=True)
class StatsResult:
    """Sorted histogram for one statistic field, plus the salary summary when applicable."""

    field: str
    entries: tuple[HistogramEntry, ...] = ()
    salary: SalarySummary | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.entries, tuple):
            raise TypeError("entries must be a tuple[HistogramEntry, ...]")
        for previous, current in zip(self.entries, self.entries[1:]):
            if current.count > previous.count:
                raise ValueError("entries must be sorted by count descending")

    def counts(self) -> dict[StatKey, int]:
        return {entry.key: entry.count for entry in self.entries}

    def total(self) -> int:
        return sum(entry.count for entry in self.entries)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "field": self.field,
            "entries": [entry.to_dict() for entry in self.entries],
        }
        if self.salary is not None:
            payload["salary"] = self.salary.to_dict()
        return payload

    def to_polars(self) -> pl.DataFrame:
        counts = [int(entry.count) for entry in self.entries]
        if self.field == "recruiter":
            keys = [entry.key for entry in self.entries]
            return pl.DataFrame(
                {
                    "first_name": [key.first_name for key in keys],
                    "last_name": [key.last_name for key in keys],
                    "company_name": [key.company_name for key in keys],
                    "count": counts,
                },
                schema={
                    "first_name": pl.String,
                    "last_name": pl.String,
                    "company_name": pl.String,
                    "count": pl.Int64,
                },
            )
        if self.field == "salary":
            return pl.DataFrame(
                {
                    "salary": [float(entry.key) for entry in self.entries],
                    "count": counts,
                },
                schema={"salary": pl.Float64, "count": pl.Int64},
            )
        return pl.DataFrame(
            {
                self.field: [entry.key for entry in self.entries],
                "count": counts,
            },
            schema={self.field: pl.String, "count": pl.Int64},
        )

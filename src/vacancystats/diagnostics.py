from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _sorted_dict(values: Mapping[str, Any]) -> dict[str, Any]:
    return {key: values[key] for key in sorted(values)}


@dataclass(frozen=True, slots=True)
class RecordOutcomeCounts:
    counts: dict[str, int] = field(default_factory=dict)

    def record(self, outcome: str, count: int = 1) -> "RecordOutcomeCounts":
        updated = dict(self.counts)
        updated[outcome] = updated.get(outcome, 0) + int(count)
        return RecordOutcomeCounts(counts=updated)

    def merge(self, other: "RecordOutcomeCounts") -> "RecordOutcomeCounts":
        updated = dict(self.counts)
        for outcome, count in other.counts.items():
            updated[outcome] = updated.get(outcome, 0) + int(count)
        return RecordOutcomeCounts(counts=updated)

    def get(self, outcome: str) -> int:
        return int(self.counts.get(outcome, 0))

    def total(self) -> int:
        return sum(int(value) for value in self.counts.values())

    def to_dict(self) -> dict[str, int]:
        return {key: int(value) for key, value in _sorted_dict(self.counts).items()}


@dataclass(frozen=True, slots=True)
class ShardFailure:
    shard: str
    error_type: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        return {
            "shard": self.shard,
            "error_type": self.error_type,
            "detail": self.detail,
        }


@dataclass(frozen=True, slots=True)
class RunDiagnostics:
    field: str
    mode: str
    workers: int
    shards_total: int
    records: RecordOutcomeCounts = field(default_factory=RecordOutcomeCounts)
    distinct_keys: int = 0
    shard_failures: tuple[ShardFailure, ...] = ()
    output_path: str | None = None

    @property
    def shards_failed(self) -> int:
        return len(self.shard_failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "mode": self.mode,
            "workers": int(self.workers),
            "shards_total": int(self.shards_total),
            "shards_failed": self.shards_failed,
            "records": self.records.to_dict(),
            "distinct_keys": int(self.distinct_keys),
            "shard_failures": [item.to_dict() for item in self.shard_failures],
            "output_path": self.output_path,
        }

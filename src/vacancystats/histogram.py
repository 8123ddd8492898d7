from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from vacancystats.domain import HistogramEntry, RecruiterKey, StatKey


def default_key_order(key: StatKey) -> tuple[Any, ...]:
    if isinstance(key, RecruiterKey):
        return key.sort_key()
    return (key,)


@dataclass(slots=True)
class Histogram:
    """Running ``StatKey -> count`` tally owned by a single shard worker."""

    counts: Counter[StatKey] = field(default_factory=Counter)

    def increment(self, key: StatKey, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("amount must be >= 0")
        self.counts[key] += amount

    def merge(self, other: "Histogram") -> "Histogram":
        for key, count in other.counts.items():
            self.counts[key] += count
        return self

    def get(self, key: StatKey) -> int:
        return int(self.counts.get(key, 0))

    def total(self) -> int:
        return sum(self.counts.values())

    def items(self) -> Iterator[tuple[StatKey, int]]:
        return iter(self.counts.items())

    def to_mapping(self) -> dict[StatKey, int]:
        return {key: int(count) for key, count in self.counts.items() if count > 0}

    def finalize(
        self,
        order: Callable[[StatKey], tuple[Any, ...]] = default_key_order,
    ) -> tuple[HistogramEntry, ...]:
        """Return entries sorted by count descending, ties broken by ``order``."""
        ranked = sorted(
            ((key, count) for key, count in self.counts.items() if count > 0),
            key=lambda item: (-item[1], order(item[0])),
        )
        return tuple(HistogramEntry(key=key, count=int(count)) for key, count in ranked)

    def __len__(self) -> int:
        return sum(1 for count in self.counts.values() if count > 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Histogram):
            return NotImplemented
        return self.to_mapping() == other.to_mapping()


def merge_histograms(histograms: Iterable[Histogram]) -> Histogram:
    merged = Histogram()
    for histogram in histograms:
        merged.merge(histogram)
    return merged

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vacancystats.diagnostics import RunDiagnostics
from vacancystats.domain import HistogramEntry, RecruiterKey, SalarySummary, StatsResult


@dataclass(frozen=True, slots=True)
class StatsRun:
    result: StatsResult
    diagnostics: RunDiagnostics

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "diagnostics": self.diagnostics.to_dict(),
        }


__all__ = [
    "HistogramEntry",
    "RecruiterKey",
    "RunDiagnostics",
    "SalarySummary",
    "StatsResult",
    "StatsRun",
]

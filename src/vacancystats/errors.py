from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class VacancyStatsError(Exception):
    """Base exception for config, shard, and runtime failures."""


class ConfigValidationError(VacancyStatsError):
    """Raised when a statistic field, worker count, or config file is invalid."""


class MalformedTokenStreamError(VacancyStatsError):
    """Raised when a token sequence has unbalanced or truncated containers."""


@dataclass(slots=True)
class ShardProcessingError(VacancyStatsError):
    """Raised when a shard cannot be opened, read, or tokenized."""

    shard: str
    detail: str

    def __str__(self) -> str:
        return f"shard '{self.shard}' failed: {self.detail}"


@dataclass(slots=True)
class StatsInitializationError(VacancyStatsError):
    """Raised when the runtime cannot be constructed from a config file."""

    config_path: Path
    detail: str

    def __str__(self) -> str:
        return f"runtime initialization failed for '{self.config_path}': {self.detail}"

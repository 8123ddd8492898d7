from __future__ import annotations

from vacancystats.config.loaders import load_stats_config
from vacancystats.config.models import (
    OUTPUT_FORMAT_NAME,
    InputConfig,
    OutputConfig,
    RuntimeConfig,
    StatsConfig,
    StatsOptions,
)

__all__ = [
    "OUTPUT_FORMAT_NAME",
    "InputConfig",
    "OutputConfig",
    "RuntimeConfig",
    "StatsConfig",
    "StatsOptions",
    "load_stats_config",
]

from __future__ import annotations

from importlib import import_module

from vacancystats.__about__ import __version__

__all__ = [
    "BytesShardSource",
    "FileShardSource",
    "Histogram",
    "RecordFieldExtractor",
    "RecordOutcome",
    "RecruiterKey",
    "SalarySummary",
    "StatsResult",
    "StatsRun",
    "VacancyStatsRuntime",
    "compute_shard_stats",
    "compute_sharded_stats",
    "discover_shards",
    "iter_json_tokens",
    "load_stats_config",
    "merge_histograms",
    "summarize_salary",
    "write_result",
    "__version__",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BytesShardSource": ("vacancystats.io", "BytesShardSource"),
    "FileShardSource": ("vacancystats.io", "FileShardSource"),
    "Histogram": ("vacancystats.histogram", "Histogram"),
    "RecordFieldExtractor": ("vacancystats.extract", "RecordFieldExtractor"),
    "RecordOutcome": ("vacancystats.extract", "RecordOutcome"),
    "RecruiterKey": ("vacancystats.domain", "RecruiterKey"),
    "SalarySummary": ("vacancystats.domain", "SalarySummary"),
    "StatsResult": ("vacancystats.domain", "StatsResult"),
    "StatsRun": ("vacancystats.objects", "StatsRun"),
    "VacancyStatsRuntime": ("vacancystats.runtime", "VacancyStatsRuntime"),
    "compute_shard_stats": ("vacancystats.driver", "compute_shard_stats"),
    "compute_sharded_stats": ("vacancystats.driver", "compute_sharded_stats"),
    "discover_shards": ("vacancystats.io", "discover_shards"),
    "iter_json_tokens": ("vacancystats.io", "iter_json_tokens"),
    "load_stats_config": ("vacancystats.config", "load_stats_config"),
    "merge_histograms": ("vacancystats.histogram", "merge_histograms"),
    "summarize_salary": ("vacancystats.summary", "summarize_salary"),
    "write_result": ("vacancystats.io", "write_result"),
}

_SUBMODULES = {
    "config",
    "driver",
    "extract",
    "histogram",
    "io",
    "schema",
    "summary",
}


def __getattr__(name: str) -> object:
    if name in _SUBMODULES:
        module = import_module(f"vacancystats.{name}")
        globals()[name] = module
        return module

    target = _LAZY_IMPORTS.get(name)
    if target is None:
        raise AttributeError(f"module 'vacancystats' has no attribute '{name}'")
    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))

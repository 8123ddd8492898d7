from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path

from vacancystats.config import StatsConfig, load_stats_config
from vacancystats.config.models import InputConfig, OutputConfig, RuntimeConfig, StatsOptions
from vacancystats.driver import compute_shard_stats, compute_sharded_stats
from vacancystats.errors import (
    ConfigValidationError,
    StatsInitializationError,
    VacancyStatsError,
)
from vacancystats.io.shards import discover_shards
from vacancystats.io.writers import default_output_name, write_result
from vacancystats.objects import StatsRun

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VacancyStatsRuntime:
    config: StatsConfig
    config_path: Path | None = None

    @classmethod
    def from_config(cls, config_path: str | Path) -> "VacancyStatsRuntime":
        path = Path(config_path).expanduser().resolve()
        try:
            config = load_stats_config(path)
        except VacancyStatsError:
            raise
        except Exception as exc:
            raise StatsInitializationError(path, str(exc)) from exc
        return cls(config=config, config_path=path)

    @classmethod
    def from_options(
        cls,
        input_path: str | Path,
        field: str,
        *,
        workers: int = 4,
        pattern: str = "*.json",
        output_path: str | Path | None = None,
        output_format: str | None = None,
        fail_fast: bool = False,
    ) -> "VacancyStatsRuntime":
        try:
            config = StatsConfig(
                input=InputConfig(path=Path(input_path).expanduser().resolve(), pattern=pattern),
                stats=StatsOptions(field=field, workers=workers),
                output=(
                    OutputConfig(
                        path=Path(output_path).expanduser().resolve(),
                        format=output_format,
                    )
                    if output_path is not None
                    else None
                ),
                runtime=RuntimeConfig(fail_fast=fail_fast),
            )
        except Exception as exc:  # pydantic ValidationError
            raise ConfigValidationError(f"invalid stats options: {exc}") from exc
        return cls(config=config)

    def run(self) -> StatsRun:
        input_path = self.config.input.path
        field = self.config.stats.field
        if input_path.is_dir():
            shards = discover_shards(input_path, self.config.input.pattern)
            if not shards:
                LOGGER.warning(
                    "No shards matching %s found in %s", self.config.input.pattern, input_path
                )
            run = compute_sharded_stats(
                shards,
                field,
                workers=self.config.stats.workers,
                fail_fast=self.config.runtime.fail_fast,
            )
        elif input_path.is_file():
            run = compute_shard_stats(input_path, field)
        else:
            raise ConfigValidationError(f"input path does not exist: '{input_path}'")

        if self.config.output is None:
            return run
        output = self.config.output
        target = output.path
        if target.is_dir():
            target = target / default_output_name(field, output.format or "xml")
        written = write_result(run.result, target, output.format)
        LOGGER.info("Wrote %s statistics to %s", field, written)
        diagnostics = dataclasses.replace(run.diagnostics, output_path=str(written))
        return StatsRun(result=run.result, diagnostics=diagnostics)

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vacancystats.schema import StatisticField

OUTPUT_FORMAT_NAME = Literal["json", "xml", "parquet"]


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


def _coerce_path_value(value: object, label: str) -> Path:
    if isinstance(value, Path):
        return value
    if isinstance(value, str) and value.strip():
        return Path(value)
    raise TypeError(f"{label} must be a non-empty path-like string")


class InputConfig(StrictModel):
    path: Path
    pattern: str = "*.json"

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value: object) -> Path:
        return _coerce_path_value(value, "input.path")

    @field_validator("pattern")
    @classmethod
    def _validate_pattern(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("input.pattern must be non-empty")
        return cleaned


class StatsOptions(StrictModel):
    field: StatisticField
    workers: int = Field(default=4, ge=1)


class OutputConfig(StrictModel):
    path: Path
    format: OUTPUT_FORMAT_NAME | None = None

    @field_validator("path", mode="before")
    @classmethod
    def _coerce_path(cls, value: object) -> Path:
        return _coerce_path_value(value, "output.path")


class RuntimeConfig(StrictModel):
    fail_fast: bool = False


class StatsConfig(StrictModel):
    input: InputConfig
    stats: StatsOptions
    output: OutputConfig | None = None
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

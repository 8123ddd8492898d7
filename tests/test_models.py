from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from vacancystats.config.models import (
    InputConfig,
    OutputConfig,
    RuntimeConfig,
    StatsConfig,
    StatsOptions,
)


def test_input_config_path_coercion_and_type_error() -> None:
    cfg = InputConfig(path="data/vacancies")  # type: ignore[arg-type]
    assert cfg.path == Path("data/vacancies")
    assert cfg.pattern == "*.json"

    with pytest.raises(TypeError, match="input.path must be a non-empty path-like string"):
        InputConfig(path=123)  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="input.path"):
        InputConfig(path="   ")  # type: ignore[arg-type]


def test_input_config_pattern_is_stripped_and_required() -> None:
    assert InputConfig(path=Path("x"), pattern=" *.json ").pattern == "*.json"
    with pytest.raises(ValidationError, match="input.pattern must be non-empty"):
        InputConfig(path=Path("x"), pattern="  ")


def test_stats_options_validation() -> None:
    assert StatsOptions(field="recruiter").workers == 4
    with pytest.raises(ValidationError):
        StatsOptions(field="title")  # type: ignore[arg-type]
    with pytest.raises(ValidationError):
        StatsOptions(field="salary", workers=0)
    with pytest.raises(ValidationError):
        StatsOptions(field="salary", workers="2")  # type: ignore[arg-type]


def test_output_config_format() -> None:
    assert OutputConfig(path=Path("out.xml")).format is None
    assert OutputConfig(path=Path("out.bin"), format="parquet").format == "parquet"
    with pytest.raises(ValidationError):
        OutputConfig(path=Path("out.csv"), format="csv")  # type: ignore[arg-type]


def test_stats_config_forbids_unknown_sections() -> None:
    cfg = StatsConfig.model_validate(
        {"input": {"path": "data"}, "stats": {"field": "position"}}
    )
    assert cfg.output is None
    assert cfg.runtime == RuntimeConfig(fail_fast=False)
    with pytest.raises(ValidationError):
        StatsConfig.model_validate(
            {"input": {"path": "data"}, "stats": {"field": "position"}, "plugins": {}}
        )

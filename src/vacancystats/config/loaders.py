from __future__ import annotations

from pathlib import Path
from typing import Any

from vacancystats.config.models import StatsConfig
from vacancystats.errors import ConfigValidationError

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigValidationError(f"cannot read config file '{path}': {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigValidationError(f"invalid TOML in '{path}': {exc}") from exc


def load_stats_config(path: str | Path) -> StatsConfig:
    config_path = Path(path).expanduser().resolve()
    raw = _read_toml(config_path)
    try:
        config = StatsConfig.model_validate(raw)
    except Exception as exc:  # pydantic ValidationError
        raise ConfigValidationError(
            f"invalid stats config '{config_path}': {exc}"
        ) from exc
    return _resolve_config_paths(config, config_path.parent)


def _resolve_config_paths(config: StatsConfig, base_dir: Path) -> StatsConfig:
    input_path = config.input.path.expanduser()
    if not input_path.is_absolute():
        input_path = (base_dir / input_path).resolve()

    output = config.output
    resolved_output = None
    if output is not None:
        output_path = output.path.expanduser()
        if not output_path.is_absolute():
            output_path = (base_dir / output_path).resolve()
        resolved_output = output.model_copy(update={"path": output_path})

    return config.model_copy(
        update={
            "input": config.input.model_copy(update={"path": input_path}),
            "output": resolved_output,
        }
    )

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

import polars as pl

from vacancystats.domain import RecruiterKey, StatsResult
from vacancystats.errors import ConfigValidationError

OUTPUT_FORMATS: tuple[str, ...] = ("json", "xml", "parquet")

_SUFFIX_FORMATS: dict[str, str] = {
    ".json": "json",
    ".xml": "xml",
    ".parquet": "parquet",
}


def default_output_name(field: str, format: str = "xml") -> str:
    return f"statistics_by_{field}.{format}"


def resolve_output_format(path: str | Path, format: str | None = None) -> str:
    if format is not None:
        if format not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"unknown output format '{format}'; expected one of: " + ", ".join(OUTPUT_FORMATS)
            )
        return format
    suffix = Path(path).suffix.lower()
    inferred = _SUFFIX_FORMATS.get(suffix)
    if inferred is None:
        raise ConfigValidationError(
            f"cannot infer output format from '{path}'; pass an explicit format"
        )
    return inferred


def render_json(result: StatsResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def _format_number(value: float | None) -> str:
    return "" if value is None else repr(float(value))


def render_xml(result: StatsResult) -> str:
    root = ET.Element("statistic")
    if result.salary is not None:
        ET.SubElement(root, "min-salary").text = _format_number(result.salary.min)
        ET.SubElement(root, "average-salary").text = _format_number(result.salary.average)
        ET.SubElement(root, "max-salary").text = _format_number(result.salary.max)

    tag = "vacancy-count-by-" + result.field.replace("_", "-") + "-statistic"
    container = ET.SubElement(root, tag)
    for entry in result.entries:
        item = ET.SubElement(container, "item")
        key = ET.SubElement(item, "key")
        if isinstance(entry.key, RecruiterKey):
            for name, value in entry.key.to_dict().items():
                child = ET.SubElement(key, name)
                if value is None:
                    child.set("null", "true")
                else:
                    child.text = value
        else:
            key.text = entry.key
        ET.SubElement(item, "count").text = str(int(entry.count))

    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return "<?xml version='1.0' encoding='UTF-8'?>\n" + body + "\n"


def write_parquet(df: pl.DataFrame, path: str | Path) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(target)


def write_result(
    result: StatsResult,
    path: str | Path,
    format: str | None = None,
) -> Path:
    """Render ``result`` to ``path`` as JSON, XML, or parquet and return the resolved path."""
    target = Path(path).expanduser().resolve()
    resolved = resolve_output_format(target, format)
    if resolved == "parquet":
        write_parquet(result.to_polars(), target)
        return target
    target.parent.mkdir(parents=True, exist_ok=True)
    text = render_json(result) if resolved == "json" else render_xml(result)
    target.write_text(text, encoding="utf-8")
    return target

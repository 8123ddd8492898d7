from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, settings


settings.register_profile(
    "ci_smoke",
    max_examples=30,
    derandomize=True,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.register_profile(
    "nightly_deep",
    max_examples=300,
    derandomize=True,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci_smoke"))


def _vacancy(
    position: str | None,
    salary: float | None,
    stack: str | None,
    first: str | None,
    last: str | None,
    company: str | None,
) -> dict[str, Any]:
    return {
        "position": position,
        "salary": salary,
        "technology_stack": stack,
        "recruiter_first_name": first,
        "recruiter_last_name": last,
        "recruiter_company_name": company,
    }


SAMPLE_VACANCIES: list[dict[str, Any]] = [
    _vacancy("Full-Stack Developer", 1000, "Java, Spring, React", "Vladyslav", "Bondar", "ProfITsoft"),
    _vacancy("Data Scientist", 1000, "Python, TensorFlow, SQL", "John", "Doe", "TechCorp"),
    _vacancy("Frontend Developer", 4600, "JavaScript, Vue.js, HTML, CSS, SQL", "Vladyslav", "Bondar", "ProfITsoft"),
    _vacancy("Software Engineer", 2500, "C++, Qt, Boost, Python", "John", "Doe", "TechCorp"),
    _vacancy("DevOps Engineer", 2500, "Docker, Kubernetes, Jenkins, SQL", "Vladyslav", "Bondar", "ProfITsoft"),
    _vacancy("Full-Stack Developer", 1500, "Java, Angular, Spring", "John", "Doe", "TechCorp"),
    _vacancy("Software Engineer", None, "Boost, C#, C++", "Vladyslav", "Bondar", "ProfITsoft"),
    _vacancy("Software Engineer", None, "C++, C, OpenGL", "Anna", "Bell", "EPAM"),
]


def write_shard(path: Path, records: list[Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture()
def sample_vacancies() -> list[dict[str, Any]]:
    return [dict(record) for record in SAMPLE_VACANCIES]


@pytest.fixture()
def sample_shard(tmp_path: Path, sample_vacancies: list[dict[str, Any]]) -> Path:
    return write_shard(tmp_path / "vacancies.json", sample_vacancies)


@pytest.fixture()
def vacancies_dir(tmp_path: Path, sample_vacancies: list[dict[str, Any]]) -> Path:
    directory = tmp_path / "vacancies"
    write_shard(directory / "part-1.json", sample_vacancies[:3])
    write_shard(directory / "part-2.json", sample_vacancies[3:6])
    write_shard(directory / "part-3.json", sample_vacancies[6:])
    (directory / "notes.txt").write_text("not a shard", encoding="utf-8")
    return directory


@pytest.fixture()
def corrupt_vacancies_dir(vacancies_dir: Path) -> Path:
    (vacancies_dir / "part-3.json").write_text('[{"position": "Broken", ', encoding="utf-8")
    return vacancies_dir


@pytest.fixture()
def stats_config_path(vacancies_dir: Path, tmp_path: Path) -> Path:
    output_path = tmp_path / "out" / "statistics_by_salary.json"
    config = f"""
[input]
path = "{vacancies_dir.as_posix()}"
pattern = "*.json"

[stats]
field = "salary"
workers = 2

[output]
path = "{output_path.as_posix()}"

[runtime]
fail_fast = false
""".strip()
    path = tmp_path / "stats.toml"
    path.write_text(config, encoding="utf-8")
    return path

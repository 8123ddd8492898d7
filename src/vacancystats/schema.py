from __future__ import annotations

import math
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, get_args

from vacancystats.domain import RecruiterKey, StatKey
from vacancystats.errors import ConfigValidationError

StatisticField = Literal["position", "salary", "recruiter", "technology_stack"]

STATISTIC_FIELDS: tuple[str, ...] = get_args(StatisticField)

POSITION_FIELD = "position"
SALARY_FIELD = "salary"
TECHNOLOGY_STACK_FIELD = "technology_stack"
RECRUITER_FIRST_NAME_FIELD = "recruiter_first_name"
RECRUITER_LAST_NAME_FIELD = "recruiter_last_name"
RECRUITER_COMPANY_NAME_FIELD = "recruiter_company_name"

REQUIRED_RECORD_FIELDS: frozenset[str] = frozenset(
    {POSITION_FIELD, RECRUITER_FIRST_NAME_FIELD}
)

TECHNOLOGY_SPLIT_PATTERN = re.compile(r",\s+")


def canonical_salary(value: Any) -> str | None:
    """Return the canonical salary key for a JSON number or numeric string.

    Negative, non-finite, and non-numeric values yield ``None``.
    """
    if isinstance(value, bool):
        return None
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    # Adding 0.0 folds -0.0 into 0.0.
    return repr(number + 0.0)


@dataclass(frozen=True, slots=True)
class FieldPolicy:
    """Extraction rules for one statistic field."""

    name: StatisticField
    wire_name: str | None
    slot_names: tuple[str, ...] = ()
    numeric: bool = False
    split_pattern: re.Pattern[str] | None = field(default=None, compare=False)

    def accepts_numbers(self, field_name: str | None) -> bool:
        return self.numeric and field_name == self.wire_name

    def capture_string(self, value: str) -> str | None:
        if self.numeric:
            return canonical_salary(value)
        return value

    def capture_number(self, value: int | float) -> str | None:
        if not self.numeric:
            return None
        return canonical_salary(value)

    def keys(self, value: str | None, slots: Mapping[str, str]) -> Iterator[StatKey]:
        if self.slot_names:
            yield RecruiterKey(
                first_name=slots.get(RECRUITER_FIRST_NAME_FIELD),
                last_name=slots.get(RECRUITER_LAST_NAME_FIELD),
                company_name=slots.get(RECRUITER_COMPANY_NAME_FIELD),
            )
            return
        if value is None:
            return
        if self.split_pattern is None:
            yield value
            return
        yield from self.split_pattern.split(value)

    def key_order(self, key: StatKey) -> tuple[Any, ...]:
        if isinstance(key, RecruiterKey):
            return key.sort_key()
        if self.numeric:
            return (float(key), key)
        return (key,)


FIELD_POLICIES: dict[str, FieldPolicy] = {
    "position": FieldPolicy(name="position", wire_name=POSITION_FIELD),
    "salary": FieldPolicy(name="salary", wire_name=SALARY_FIELD, numeric=True),
    "recruiter": FieldPolicy(
        name="recruiter",
        wire_name=None,
        slot_names=(
            RECRUITER_FIRST_NAME_FIELD,
            RECRUITER_LAST_NAME_FIELD,
            RECRUITER_COMPANY_NAME_FIELD,
        ),
    ),
    "technology_stack": FieldPolicy(
        name="technology_stack",
        wire_name=TECHNOLOGY_STACK_FIELD,
        split_pattern=TECHNOLOGY_SPLIT_PATTERN,
    ),
}


def resolve_field_policy(name: object) -> FieldPolicy:
    if isinstance(name, FieldPolicy):
        return name
    if not isinstance(name, str) or name not in FIELD_POLICIES:
        raise ConfigValidationError(
            f"invalid statistic field '{name}'; expected one of: "
            + ", ".join(STATISTIC_FIELDS)
        )
    return FIELD_POLICIES[name]

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from vacancystats.diagnostics import RecordOutcomeCounts
from vacancystats.errors import MalformedTokenStreamError
from vacancystats.histogram import Histogram
from vacancystats.io.tokens import Token, TokenKind
from vacancystats.schema import REQUIRED_RECORD_FIELDS, FieldPolicy, resolve_field_policy


class RecordOutcome(str, Enum):
    COUNTED = "counted"
    NO_VALUE = "no_value"
    MISSING_REQUIRED = "missing_required"
    NULL_REQUIRED = "null_required"
    NON_STRING_REQUIRED = "non_string_required"


# Exclusion precedence when several required fields are invalid.
_EXCLUSION_RANK: dict[RecordOutcome, int] = {
    RecordOutcome.MISSING_REQUIRED: 0,
    RecordOutcome.NULL_REQUIRED: 1,
    RecordOutcome.NON_STRING_REQUIRED: 2,
}


@dataclass(slots=True)
class _ObjectScratch:
    pending_field: str | None = None
    observed: set[str] = field(default_factory=set)
    rejected: dict[str, RecordOutcome] = field(default_factory=dict)
    slots: dict[str, str] = field(default_factory=dict)
    current_value: str | None = None
    # Opened inside another object; evaluated for the histogram but not tallied.
    nested: bool = False

    def take_field(self) -> str | None:
        name = self.pending_field
        self.pending_field = None
        return name

    def reject(self, name: str | None, outcome: RecordOutcome) -> None:
        if name in REQUIRED_RECORD_FIELDS:
            previous = self.rejected.get(name)
            if previous is None or _EXCLUSION_RANK[outcome] > _EXCLUSION_RANK[previous]:
                self.rejected[name] = outcome

    def exclusion(self) -> RecordOutcome | None:
        if self.observed == REQUIRED_RECORD_FIELDS:
            return None
        worst = RecordOutcome.MISSING_REQUIRED
        for name in REQUIRED_RECORD_FIELDS - self.observed:
            outcome = self.rejected.get(name, RecordOutcome.MISSING_REQUIRED)
            if _EXCLUSION_RANK[outcome] > _EXCLUSION_RANK[worst]:
                worst = outcome
        return worst


class RecordFieldExtractor:
    """Single-pass consumer of one shard's token stream.

    Each JSON object is tracked as a candidate record on a stack of scratch
    states, so memory grows with nesting depth and histogram cardinality only.
    A record is counted only when both ``position`` and
    ``recruiter_first_name`` were observed as strings inside the object itself.
    """

    def __init__(self, field: object) -> None:
        self.policy: FieldPolicy = resolve_field_policy(field)
        self.histogram = Histogram()
        self._outcomes: Counter[str] = Counter()
        # None marks an open array.
        self._stack: list[_ObjectScratch | None] = []
        self._open_objects = 0

    @property
    def outcomes(self) -> RecordOutcomeCounts:
        return RecordOutcomeCounts(counts=dict(self._outcomes))

    def consume(self, tokens: Iterable[Token]) -> Histogram:
        for token in tokens:
            self.feed(token)
        if self._stack:
            raise MalformedTokenStreamError(
                f"token stream ended inside {len(self._stack)} open container(s)"
            )
        return self.histogram

    def feed(self, token: Token) -> None:
        kind = token.kind
        if kind is TokenKind.START_OBJECT:
            self._open_container()
            self._stack.append(_ObjectScratch(nested=self._open_objects > 0))
            self._open_objects += 1
        elif kind is TokenKind.START_ARRAY:
            self._open_container()
            self._stack.append(None)
        elif kind is TokenKind.END_OBJECT:
            scratch = self._close_container(kind)
            if scratch is None:
                raise MalformedTokenStreamError("end of object while an array is open")
            self._open_objects -= 1
            self._finish_record(scratch)
        elif kind is TokenKind.END_ARRAY:
            if self._close_container(kind) is not None:
                raise MalformedTokenStreamError("end of array while an object is open")
        elif kind is TokenKind.FIELD_NAME:
            scratch = self._current_object()
            if scratch is None:
                raise MalformedTokenStreamError("field name outside of an object")
            scratch.pending_field = token.value
        elif kind is TokenKind.STRING:
            scratch = self._current_object()
            if scratch is not None:
                self._on_string(scratch, scratch.take_field(), token.value)
        elif kind is TokenKind.NUMBER:
            scratch = self._current_object()
            if scratch is not None:
                self._on_number(scratch, scratch.take_field(), token.value)
        elif kind is TokenKind.NULL:
            scratch = self._current_object()
            if scratch is not None:
                scratch.reject(scratch.take_field(), RecordOutcome.NULL_REQUIRED)
        elif kind is TokenKind.BOOLEAN:
            scratch = self._current_object()
            if scratch is not None:
                scratch.reject(scratch.take_field(), RecordOutcome.NON_STRING_REQUIRED)
        else:
            raise MalformedTokenStreamError(f"unsupported token kind '{kind}'")

    def _current_object(self) -> _ObjectScratch | None:
        if not self._stack:
            return None
        return self._stack[-1]

    def _open_container(self) -> None:
        # A nested container used as a field value is a non-string value for that field.
        parent = self._current_object()
        if parent is not None:
            parent.reject(parent.take_field(), RecordOutcome.NON_STRING_REQUIRED)

    def _close_container(self, kind: TokenKind) -> _ObjectScratch | None:
        if not self._stack:
            raise MalformedTokenStreamError(f"unbalanced '{kind.value}' token")
        return self._stack.pop()

    def _on_string(self, scratch: _ObjectScratch, name: str | None, value: str) -> None:
        if name in REQUIRED_RECORD_FIELDS:
            scratch.observed.add(name)
        if name is None:
            return
        policy = self.policy
        if name == policy.wire_name:
            scratch.current_value = policy.capture_string(value)
        elif name in policy.slot_names:
            scratch.slots[name] = value

    def _on_number(
        self, scratch: _ObjectScratch, name: str | None, value: int | float
    ) -> None:
        scratch.reject(name, RecordOutcome.NON_STRING_REQUIRED)
        if self.policy.accepts_numbers(name):
            scratch.current_value = self.policy.capture_number(value)

    def _finish_record(self, scratch: _ObjectScratch) -> None:
        excluded = scratch.exclusion()
        if excluded is not None:
            if not scratch.nested:
                self._outcomes[excluded.value] += 1
            return
        counted = False
        for key in self.policy.keys(scratch.current_value, scratch.slots):
            self.histogram.increment(key)
            counted = True
        if scratch.nested:
            return
        outcome = RecordOutcome.COUNTED if counted else RecordOutcome.NO_VALUE
        self._outcomes[outcome.value] += 1


def extract_histogram(tokens: Iterable[Token], field: object) -> Histogram:
    return RecordFieldExtractor(field).consume(tokens)

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import ijson

from vacancystats.diagnostics import RecordOutcomeCounts, RunDiagnostics, ShardFailure
from vacancystats.domain import StatsResult
from vacancystats.errors import (
    ConfigValidationError,
    MalformedTokenStreamError,
    ShardProcessingError,
)
from vacancystats.extract import RecordFieldExtractor
from vacancystats.histogram import Histogram, merge_histograms
from vacancystats.io.shards import ShardLike, ShardSource, as_shard_source, as_shard_sources
from vacancystats.io.tokens import iter_json_tokens
from vacancystats.objects import StatsRun
from vacancystats.schema import SALARY_FIELD, FieldPolicy, resolve_field_policy
from vacancystats.summary import summarize_salary

LOGGER = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


@dataclass(frozen=True, slots=True)
class ShardOutcome:
    shard: str
    histogram: Histogram = field(default_factory=Histogram)
    records: RecordOutcomeCounts = field(default_factory=RecordOutcomeCounts)
    error: ShardProcessingError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def failure(self) -> ShardFailure | None:
        if self.error is None:
            return None
        cause = self.error.__cause__ or self.error
        return ShardFailure(
            shard=self.shard,
            error_type=cause.__class__.__name__,
            detail=self.error.detail,
        )


def validate_workers(workers: object) -> int:
    if isinstance(workers, bool) or not isinstance(workers, int):
        raise ConfigValidationError(f"workers must be a positive integer, got {workers!r}")
    if workers < 1:
        raise ConfigValidationError(f"workers must be >= 1, got {workers}")
    return workers


def extract_shard(source: ShardSource, policy: FieldPolicy) -> ShardOutcome:
    """Fully consume one shard with a fresh extractor; shard errors are raised."""
    name = source.name
    extractor = RecordFieldExtractor(policy)
    try:
        with source.open() as stream:
            histogram = extractor.consume(iter_json_tokens(stream))
    except OSError as exc:
        raise ShardProcessingError(name, f"cannot read shard: {exc}") from exc
    except ijson.JSONError as exc:
        raise ShardProcessingError(name, f"invalid JSON: {exc}") from exc
    except MalformedTokenStreamError as exc:
        raise ShardProcessingError(name, str(exc)) from exc
    except ValueError as exc:
        # Undecodable bytes surface as UnicodeDecodeError.
        raise ShardProcessingError(name, f"cannot decode shard: {exc}") from exc
    return ShardOutcome(shard=name, histogram=histogram, records=extractor.outcomes)


def _extract_shard_best_effort(source: ShardSource, policy: FieldPolicy) -> ShardOutcome:
    try:
        return extract_shard(source, policy)
    except ShardProcessingError as exc:
        LOGGER.warning("Skipping shard %s: %s", exc.shard, exc.detail)
        return ShardOutcome(shard=exc.shard, error=exc)


def build_result(histogram: Histogram, policy: FieldPolicy) -> StatsResult:
    salary = summarize_salary(histogram) if policy.name == SALARY_FIELD else None
    return StatsResult(
        field=policy.name,
        entries=histogram.finalize(order=policy.key_order),
        salary=salary,
    )


def compute_shard_stats(source: ShardLike, field: object) -> StatsRun:
    """Single-shard path: runs on the calling thread and propagates shard errors."""
    policy = resolve_field_policy(field)
    shard = as_shard_source(source)
    outcome = extract_shard(shard, policy)
    result = build_result(outcome.histogram, policy)
    diagnostics = RunDiagnostics(
        field=policy.name,
        mode="single",
        workers=1,
        shards_total=1,
        records=outcome.records,
        distinct_keys=len(result.entries),
    )
    return StatsRun(result=result, diagnostics=diagnostics)


def compute_sharded_stats(
    sources: Iterable[ShardLike],
    field: object,
    workers: int = DEFAULT_WORKERS,
    *,
    fail_fast: bool = False,
) -> StatsRun:
    """Fan shards out over a bounded thread pool, join, then merge once.

    A shard that cannot be read or tokenized contributes an empty histogram
    and is reported in ``diagnostics.shard_failures``. With ``fail_fast`` the
    first failed shard (in submission order) is re-raised after the join.
    """
    policy = resolve_field_policy(field)
    max_workers = validate_workers(workers)
    shards = as_shard_sources(sources)

    with ThreadPoolExecutor(
        max_workers=max_workers,
        thread_name_prefix="vacancystats-shard",
    ) as pool:
        futures = [pool.submit(_extract_shard_best_effort, shard, policy) for shard in shards]
        outcomes = [future.result() for future in futures]

    if fail_fast:
        for outcome in outcomes:
            if outcome.error is not None:
                raise outcome.error

    merged = merge_histograms(outcome.histogram for outcome in outcomes)
    records = RecordOutcomeCounts()
    for outcome in outcomes:
        records = records.merge(outcome.records)
    failures = tuple(
        failure for failure in (outcome.failure() for outcome in outcomes) if failure is not None
    )
    result = build_result(merged, policy)
    LOGGER.info(
        "Computed %s statistics over %d shard(s) with %d worker(s); %d failed",
        policy.name,
        len(shards),
        max_workers,
        len(failures),
    )
    diagnostics = RunDiagnostics(
        field=policy.name,
        mode="sharded",
        workers=max_workers,
        shards_total=len(shards),
        records=records,
        distinct_keys=len(result.entries),
        shard_failures=failures,
    )
    return StatsRun(result=result, diagnostics=diagnostics)

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from vacancystats.driver import compute_shard_stats, compute_sharded_stats
from vacancystats.errors import ShardProcessingError
from vacancystats.histogram import Histogram, merge_histograms
from vacancystats.io.shards import BytesShardSource

from .strategies import FIELD_NAMES, TEXT_VALUES, VACANCY_LISTS, encode_records, split_records


@pytest.mark.fuzz
@given(
    records=VACANCY_LISTS,
    field=FIELD_NAMES,
    workers=st.integers(min_value=1, max_value=4),
    data=st.data(),
)
def test_fuzz_shard_split_does_not_change_result(
    records: list[dict[str, Any]], field: str, workers: int, data: st.DataObject
) -> None:
    cuts = sorted(
        data.draw(st.lists(st.integers(min_value=0, max_value=len(records)), max_size=4))
    )
    whole = compute_shard_stats(BytesShardSource("whole", encode_records(records)), field)
    shards = [
        BytesShardSource(f"part-{index}", encode_records(part))
        for index, part in enumerate(split_records(records, cuts))
    ]
    sharded = compute_sharded_stats(shards, field, workers=workers)

    assert sharded.result == whole.result
    assert sharded.diagnostics.records == whole.diagnostics.records
    assert sharded.diagnostics.shards_failed == 0


@pytest.mark.fuzz
@given(
    parts=st.lists(
        st.dictionaries(TEXT_VALUES, st.integers(min_value=0, max_value=50), max_size=6),
        max_size=5,
    ),
)
def test_fuzz_histogram_merge_is_order_independent(parts: list[dict[str, int]]) -> None:
    def build() -> list[Histogram]:
        histograms = []
        for counts in parts:
            histogram = Histogram()
            for key, count in counts.items():
                histogram.increment(key, count)
            histograms.append(histogram)
        return histograms

    forward = merge_histograms(build())
    backward = merge_histograms(reversed(build()))
    assert forward == backward
    assert forward.total() == sum(sum(counts.values()) for counts in parts)


@pytest.mark.fuzz
@given(records=VACANCY_LISTS, field=FIELD_NAMES, data=st.data())
def test_fuzz_truncated_shard_fails_as_shard_error(
    records: list[dict[str, Any]], field: str, data: st.DataObject
) -> None:
    payload = encode_records(records)
    cut = data.draw(st.integers(min_value=1, max_value=len(payload) - 1))
    source = BytesShardSource("truncated", payload[:cut])
    with pytest.raises(ShardProcessingError) as excinfo:
        compute_shard_stats(source, field)
    assert excinfo.value.shard == "truncated"

    run = compute_sharded_stats([source], field)
    assert run.diagnostics.shards_failed == 1
    assert run.result.entries == ()

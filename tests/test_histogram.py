from __future__ import annotations

import pytest

from vacancystats.domain import HistogramEntry, RecruiterKey
from vacancystats.histogram import Histogram, merge_histograms
from vacancystats.schema import resolve_field_policy


def _histogram(**counts: int) -> Histogram:
    histogram = Histogram()
    for key, count in counts.items():
        histogram.increment(key, count)
    return histogram


def test_increment_and_get() -> None:
    histogram = Histogram()
    histogram.increment("Java")
    histogram.increment("Java")
    histogram.increment("SQL", 3)
    assert histogram.get("Java") == 2
    assert histogram.get("SQL") == 3
    assert histogram.get("Rust") == 0
    assert histogram.total() == 5
    assert len(histogram) == 2


def test_increment_rejects_negative_amount() -> None:
    with pytest.raises(ValueError, match="amount must be >= 0"):
        Histogram().increment("Java", -1)


def test_zero_counts_are_not_reported() -> None:
    histogram = _histogram(Java=0, SQL=1)
    assert histogram.to_mapping() == {"SQL": 1}
    assert len(histogram) == 1
    assert histogram.finalize() == (HistogramEntry("SQL", 1),)


def test_merge_adds_counts_in_place() -> None:
    left = _histogram(Java=2, SQL=1)
    right = _histogram(SQL=4, Go=1)
    merged = left.merge(right)
    assert merged is left
    assert merged.to_mapping() == {"Java": 2, "SQL": 5, "Go": 1}
    assert right.to_mapping() == {"SQL": 4, "Go": 1}


def test_merge_histograms_is_order_independent() -> None:
    parts = [_histogram(a=1, b=2), _histogram(b=1, c=5), Histogram()]
    forward = merge_histograms(parts)
    backward = merge_histograms(reversed([_histogram(a=1, b=2), _histogram(b=1, c=5)]))
    assert forward == backward
    assert forward.to_mapping() == {"a": 1, "b": 3, "c": 5}
    assert merge_histograms([]) == Histogram()


def test_finalize_orders_by_count_then_key() -> None:
    histogram = _histogram(Python=2, Java=2, SQL=3, Go=1, C=1)
    entries = histogram.finalize()
    assert [(entry.key, entry.count) for entry in entries] == [
        ("SQL", 3),
        ("Java", 2),
        ("Python", 2),
        ("C", 1),
        ("Go", 1),
    ]


def test_finalize_salary_ties_order_numerically() -> None:
    histogram = Histogram()
    for key in ("900.0", "10000.0", "1500.0"):
        histogram.increment(key)
    entries = histogram.finalize(order=resolve_field_policy("salary").key_order)
    assert [entry.key for entry in entries] == ["900.0", "1500.0", "10000.0"]


def test_finalize_recruiter_ties_put_none_before_empty_string() -> None:
    histogram = Histogram()
    histogram.increment(RecruiterKey("Anna", "", "EPAM"))
    histogram.increment(RecruiterKey("Anna", None, "EPAM"))
    histogram.increment(RecruiterKey("Anna", "Bell", None))
    entries = histogram.finalize(order=resolve_field_policy("recruiter").key_order)
    assert [entry.key for entry in entries] == [
        RecruiterKey("Anna", None, "EPAM"),
        RecruiterKey("Anna", "", "EPAM"),
        RecruiterKey("Anna", "Bell", None),
    ]


def test_histogram_equality_ignores_zero_counts() -> None:
    assert _histogram(a=1, b=0) == _histogram(a=1)
    assert _histogram(a=1) != _histogram(a=2)
    assert Histogram().__eq__("a") is NotImplemented

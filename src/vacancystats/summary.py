from __future__ import annotations

from fractions import Fraction

from vacancystats.domain import SalarySummary
from vacancystats.histogram import Histogram


def summarize_salary(histogram: Histogram) -> SalarySummary:
    """Compute min, max, and the exact weighted mean of a merged salary histogram.

    Keys are canonical salary strings. The mean is accumulated as a
    ``Fraction`` over the expanded multiset and rounded to ``float`` once, so
    the result does not depend on how the records were sharded.
    """
    minimum: float | None = None
    maximum: float | None = None
    weighted = Fraction(0)
    total = 0
    for key, count in histogram.items():
        if count <= 0:
            continue
        value = float(key)
        if minimum is None or value < minimum:
            minimum = value
        if maximum is None or value > maximum:
            maximum = value
        weighted += Fraction(value) * count
        total += count
    if total == 0:
        return SalarySummary(min=None, max=None, average=None, count=0)
    return SalarySummary(
        min=minimum,
        max=maximum,
        average=float(weighted / total),
        count=total,
    )

"""Combiner policy for sparse sensor samples.

Sensors in this family report a few times a minute at best, so most
history buckets hold the :data:`~pyrtl433._constants.ABSENT` sentinel.
Merging two samples keeps the most extreme reading for the sign of the
quantity; folding a whole bucket ring averages only the real readings.
"""

from __future__ import annotations

from collections.abc import Iterable

from pyrtl433._constants import ABSENT


def is_absent(value: int) -> bool:
    return value == ABSENT


def combine(a: int, b: int) -> int:
    """Merge two samples landing in the same bucket.

    - absent on either side yields the other sample
    - both negative yields the more negative one
    - both positive yields the larger one
    - mixed sign or zero yields the smaller one
    """
    if a == ABSENT:
        return b
    if b == ABSENT:
        return a
    if a < 0 and b < 0:
        return min(a, b)
    if a > 0 and b > 0:
        return max(a, b)
    return min(a, b)


def average(values: Iterable[int]) -> int:
    """Mean of the non-absent samples, truncated toward zero.

    Returns :data:`ABSENT` when no sample is present.
    """
    total = 0
    count = 0
    for value in values:
        if value == ABSENT:
            continue
        total += value
        count += 1

    if count == 0:
        return ABSENT

    # Truncate toward zero; floor division would round negative means down.
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient

from __future__ import annotations

import pytest

from pyrtl433._constants import ABSENT
from pyrtl433.state.combiner import average, combine


@pytest.mark.parametrize(("a", "b"), [(1, 5), (5, 1), (7, 7), (120, 3)])
def test_combine_positive_pairs_keep_the_maximum(a: int, b: int) -> None:
    assert combine(a, b) == max(a, b)


@pytest.mark.parametrize(("a", "b"), [(-1, -5), (-5, -1), (-40, -39)])
def test_combine_negative_pairs_keep_the_most_negative(a: int, b: int) -> None:
    assert combine(a, b) == min(a, b)


@pytest.mark.parametrize("value", [-12, 0, 1, 42])
def test_absent_is_identity(value: int) -> None:
    assert combine(value, ABSENT) == value
    assert combine(ABSENT, value) == value


def test_combine_both_absent_stays_absent() -> None:
    assert combine(ABSENT, ABSENT) == ABSENT


def test_mixed_sign_and_zero_lean_to_the_lesser_value() -> None:
    assert combine(-3, 5) == -3
    assert combine(5, -3) == -3
    assert combine(0, 5) == 0
    assert combine(-2, 0) == -2


def test_average_skips_absent_entries() -> None:
    assert average([5, ABSENT, 15]) == 10


def test_average_all_absent_is_absent() -> None:
    assert average([ABSENT, ABSENT, ABSENT]) == ABSENT
    assert average([]) == ABSENT


def test_average_truncates_toward_zero() -> None:
    assert average([1, 2]) == 1
    assert average([-1, -2]) == -1

"""
Tests for the three order checks: linear, cocktail and divided.

What we check:
- Every checker accepts every nondecreasing range
- Linear and cocktail reject any range with an adjacent inversion, and always agree
- Divided agrees on sorted, reversed and end-swap inputs, and is knowingly weaker
  on some interior inversions
- Empty and single-element ranges are sorted
- Invalid arguments give False (never an exception) without reading elements
- Comparator exceptions propagate

Note:
- This file inserts the project `src/` onto sys.path so tests run without installing the package.
"""

from __future__ import annotations

import pathlib
import sys
from typing import Any, List

import numpy as np
import pytest
from hypothesis import HealthCheck, assume, given, settings, strategies as st

# Ensure `src/` is importable when running `pytest` from the repo root
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from sortcheck.validate import (  # noqa: E402
    CHECKERS,
    CountingComparator,
    compare_max_to_min,
    compare_min_to_max,
    first_violation_index,
    get_checker,
    is_sorted_cocktail,
    is_sorted_divided,
    is_sorted_linear,
)

ALL_CHECKERS = [is_sorted_linear, is_sorted_cocktail, is_sorted_divided]
ADJACENT_CHECKERS = [is_sorted_linear, is_sorted_cocktail]

cmp = compare_min_to_max


class ExplodingSequence(list):
    """A list that fails the test if any element is read."""

    def __getitem__(self, item: Any) -> Any:
        raise AssertionError(f"element {item!r} read on a rejected call")


def _boom(a: Any, b: Any) -> int:
    raise RuntimeError("comparator failed")


# ------------------------- unit tests (deterministic) ------------------------- #


@pytest.mark.parametrize("check", ALL_CHECKERS)
@pytest.mark.parametrize(
    "a",
    [
        [5],
        [1, 2],
        [7, 7, 7, 7],
        [1, 2, 3, 4, 5],
        [1, 1, 2, 3, 3, 3, 9],
        list(range(20)),
        list(range(21)),
        [-10, -1, 0, 0, 5],
    ],
)
def test_sorted_inputs_accepted(check, a: List[int]) -> None:
    assert check(a, cmp) is True
    assert check(a, cmp, 0, len(a)) is True


@pytest.mark.parametrize("check", ALL_CHECKERS)
@pytest.mark.parametrize("n", [2, 3, 4, 5, 10, 11])
def test_reversed_inputs_rejected(check, n: int) -> None:
    a = list(range(n))[::-1]
    assert check(a, cmp) is False


@pytest.mark.parametrize("check", ALL_CHECKERS)
@pytest.mark.parametrize("n", [2, 3, 4, 5, 8, 9])
def test_end_swap_rejected(check, n: int) -> None:
    a = list(range(n))
    a[0], a[-1] = a[-1], a[0]
    assert check(a, cmp) is False


@pytest.mark.parametrize("check", ALL_CHECKERS)
def test_middle_pair_swap_rejected_on_even_length(check) -> None:
    a = [1, 2, 4, 3, 5, 6]
    assert check(a, cmp) is False


@pytest.mark.parametrize("check", ALL_CHECKERS)
def test_descending_comparator(check) -> None:
    assert check([9, 5, 5, 1], compare_max_to_min) is True
    assert check([1, 5, 9], compare_max_to_min) is False


@pytest.mark.parametrize("check", ALL_CHECKERS)
@pytest.mark.parametrize("start", [0, 1, 2, 5])
def test_empty_and_singleton_ranges_sorted(check, start: int) -> None:
    a = [9, 3, 7, 1, 8]
    assert check(a, cmp, start, start) is True
    if start < len(a):
        assert check(a, cmp, start, start + 1) is True


@pytest.mark.parametrize("check", ALL_CHECKERS)
def test_numpy_arrays_and_indices(check) -> None:
    a = np.array([3, 1, 4, 5, 9, 2])
    assert check(a, cmp, np.int64(1), np.int64(5)) is True
    assert check(a, cmp) is False


# ------------------------- invalid arguments (fail-closed) ------------------------- #


@pytest.mark.parametrize("check", ALL_CHECKERS)
@pytest.mark.parametrize(
    "args",
    [
        (None, cmp),
        ([], cmp),
        ([1, 2, 3], None),
        ([1, 2, 3], "not callable"),
        ([1, 2, 3], cmp, 2, 1),       # inverted
        ([1, 2, 3], cmp, -1, 2),      # negative start
        ([1, 2, 3], cmp, 0, 4),       # past the end
        ([1, 2, 3], cmp, 4, None),    # start past the end, last defaults to len
        ([1, 2, 3], cmp, 0.0, 2),     # not an int
        ([1, 2, 3], cmp, True, 2),    # bool is not an index
    ],
)
def test_invalid_arguments_return_false(check, args) -> None:
    assert check(*args) is False


@pytest.mark.parametrize("check", ALL_CHECKERS)
def test_rejected_call_reads_no_elements(check) -> None:
    seq = ExplodingSequence([3, 2, 1])
    assert check(seq, None) is False
    assert check(seq, cmp, 2, 1) is False
    assert check(seq, cmp, 0, 10) is False


@pytest.mark.parametrize("check", ALL_CHECKERS)
def test_comparator_exception_propagates(check) -> None:
    with pytest.raises(RuntimeError, match="comparator failed"):
        check([1, 2, 3, 4], _boom)


# ------------------------- concrete scenarios ------------------------- #


def test_scenario_unsorted_five() -> None:
    a = [5, 3, 6, 1, 46]
    assert is_sorted_linear(a, cmp) is False
    assert is_sorted_cocktail(a, cmp) is False
    assert first_violation_index(a, cmp) == 0


def test_scenario_sorted_subrange() -> None:
    a = [1, 2, 3, 4, 5]
    for check in ALL_CHECKERS:
        assert check(a, cmp, 1, 4) is True

    # exchange the 4 and the 2: only the middle of the list is disturbed
    a[1], a[3] = a[3], a[1]
    assert a == [1, 4, 3, 2, 5]
    for check in ADJACENT_CHECKERS:
        assert check(a, cmp, 1, 4) is False
        assert check(a, cmp) is False
        # ranges that avoid the swapped slots are still sorted
        assert check(a, cmp, 0, 2) is True
        assert check(a, cmp, 4, 5) is True
    assert first_violation_index(a, cmp, 1, 4) == 1


def test_divided_misses_some_interior_inversions() -> None:
    # Divided only compares symmetric pairs inside each half, so an inversion
    # between two elements it never pairs up goes unnoticed.
    a = [2, 1, 3, 4, 5]
    assert is_sorted_linear(a, cmp) is False
    assert is_sorted_cocktail(a, cmp) is False
    assert is_sorted_divided(a, cmp) is True


def test_comparison_counts_differ_by_strategy() -> None:
    a = list(range(100))
    counts = {}
    for name, check in CHECKERS.items():
        counting = CountingComparator(cmp)
        assert check(a, counting) is True
        counts[name] = counting.calls
    assert counts["linear"] == 99
    # two comparisons per move, ceil(100 / 2) moves
    assert counts["cocktail"] == 100
    # seam + 25 symmetric pairs in [0, 49] + 25 in [50, 99]
    assert counts["divided"] == 1 + 25 + 25


def test_get_checker() -> None:
    assert get_checker("linear") is is_sorted_linear
    with pytest.raises(ValueError, match="Unknown checker"):
        get_checker("bogus")


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-50, max_value=50)


@st.composite
def seq_and_range(draw, max_size: int = 60):
    xs = draw(st.lists(small_ints, min_size=1, max_size=max_size))
    start = draw(st.integers(min_value=0, max_value=len(xs)))
    last = draw(st.integers(min_value=start, max_value=len(xs)))
    return xs, start, last


@settings(deadline=None, max_examples=1000)
@given(seq_and_range())
def test_property_linear_equals_cocktail(case) -> None:
    xs, start, last = case
    assert is_sorted_linear(xs, cmp, start, last) == is_sorted_cocktail(xs, cmp, start, last)


@settings(deadline=None, max_examples=200)
@given(seq_and_range())
def test_property_sorted_ranges_accepted_by_all(case) -> None:
    xs, start, last = case
    xs[start:last] = sorted(xs[start:last])
    for check in ALL_CHECKERS:
        assert check(xs, cmp, start, last) is True


@settings(deadline=None, max_examples=200, suppress_health_check=[HealthCheck.filter_too_much])
@given(seq_and_range())
def test_property_adjacent_inversion_rejected(case) -> None:
    xs, start, last = case
    assume(last - start >= 2)
    i = first_violation_index(xs, cmp, start, last)
    assume(i is not None)
    for check in ADJACENT_CHECKERS:
        assert check(xs, cmp, start, last) is False


@settings(deadline=None, max_examples=200)
@given(seq_and_range())
def test_property_divided_never_rejects_what_linear_accepts(case) -> None:
    xs, start, last = case
    if is_sorted_linear(xs, cmp, start, last):
        assert is_sorted_divided(xs, cmp, start, last) is True


@settings(deadline=None, max_examples=200)
@given(seq_and_range())
def test_property_checks_do_not_mutate(case) -> None:
    xs, start, last = case
    before = list(xs)
    for check in ALL_CHECKERS:
        check(xs, cmp, start, last)
    assert xs == before

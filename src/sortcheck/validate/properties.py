"""
Property helpers for validating sorter output and diagnosing check failures.

Public API (stable):
    first_violation_index(seq, compare, start_index=None, last_index=None) -> int | None
    is_permutation(a, b) -> bool
    permutation_counter_diff(a, b) -> dict[value, int]
    assert_no_mutation(before, after) -> None
    assert_untouched_outside(before, after, start_index, last_index) -> None

Notes
-----
- `first_violation_index` follows the same fail-closed gate as the order
  checks, except that it has no "not sorted" answer to fall back on: on
  invalid arguments it returns None, which callers should read together with
  a False from `is_sorted_linear`.
- The permutation helpers need hashable elements (they are Counter-based).
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Optional, Sequence

from .comparisons import Comparator
from .preconditions import parameters_are_valid, resolve_range

__all__ = [
    "first_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "assert_untouched_outside",
]


def first_violation_index(
    seq: Sequence[Any],
    compare: Comparator,
    start_index: Optional[int] = None,
    last_index: Optional[int] = None,
) -> int | None:
    """
    Return the first index i in the range where compare(seq[i], seq[i+1]) > 0.

    Useful for precise error messages:
        i = first_violation_index(out, compare_min_to_max)
        assert i is None, f"out of order at i={i}: {out[i]} > {out[i+1]}"
    """
    if not parameters_are_valid(seq, compare, start_index, last_index):
        return None
    start, last = resolve_range(seq, start_index, last_index)
    for i in range(start, last - 1):
        if compare(seq[i], seq[i + 1]) > 0:
            return i
    return None


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """
    Return True iff `a` and `b` contain exactly the same multiset of values.
    """
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def permutation_counter_diff(a: Sequence[Any], b: Sequence[Any]) -> Dict[Any, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    """
    ca = Counter(a)
    cb = Counter(b)
    diff: Dict[Any, int] = {}
    for k in set(ca) | set(cb):
        d = ca.get(k, 0) - cb.get(k, 0)
        if d != 0:
            diff[k] = d
    return diff


def assert_no_mutation(before: Sequence[Any], after: Sequence[Any]) -> None:
    """
    Assert that two sequences are element-wise equal; used to confirm a
    read-only check did not write to its input.

    Raises AssertionError naming the first differing index.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Input mutated: length changed from {len(before)} to {len(after)}"
        )
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: before={x}, after={y}")


def assert_untouched_outside(
    before: Sequence[Any], after: Sequence[Any], start_index: int, last_index: int
) -> None:
    """Assert that a range operation left everything outside [start_index, last_index) alone."""
    assert_no_mutation(before[:start_index], after[:start_index])
    assert_no_mutation(before[last_index:], after[last_index:])

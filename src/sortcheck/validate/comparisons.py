"""
Comparator helpers.

A comparator is any callable `compare(a, b) -> int` that returns a negative
number when `a` sorts before `b`, zero when they tie, and a positive number
when `a` sorts after `b` (the `functools.cmp_to_key` convention).

Public API (stable):
    Comparator                      # typing alias
    compare_min_to_max(a, b) -> int # ascending
    compare_max_to_min(a, b) -> int # descending
    CountingComparator(compare)     # wraps a comparator and counts calls
"""

from __future__ import annotations

from typing import Any, Callable

__all__ = [
    "Comparator",
    "compare_min_to_max",
    "compare_max_to_min",
    "CountingComparator",
]

Comparator = Callable[[Any, Any], int]


def compare_min_to_max(a: Any, b: Any) -> int:
    """Ascending order: smaller values first."""
    # Branches rather than bool arithmetic, which NumPy scalars refuse
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_max_to_min(a: Any, b: Any) -> int:
    """Descending order: larger values first."""
    return compare_min_to_max(b, a)


class CountingComparator:
    """
    Wrap a comparator and count how many times it is called.

    Useful for contrasting the traversal strategies, which visit a different
    number of pairs for the same input:

        counting = CountingComparator(compare_min_to_max)
        is_sorted_cocktail(xs, counting)
        counting.calls
    """

    def __init__(self, compare: Comparator) -> None:
        self.compare = compare
        self.calls = 0

    def __call__(self, a: Any, b: Any) -> int:
        self.calls += 1
        return self.compare(a, b)

    def reset(self) -> None:
        self.calls = 0

"""
Order checks: is a (sub-)range of a sequence sorted under a comparator?

Three independent traversal strategies answer the same question:

- linear:
    Walk adjacent pairs left to right, stop at the first inversion.

- cocktail:
    Walk adjacent pairs from both ends at once, two cursors moving inward.
    Visits exactly the pairs `linear` visits, so the answers always agree.

- divided:
    Split the range at its midpoint and check each half by comparing
    elements symmetrically inward from the half's ends (a "partition" check).
    This is weaker than adjacency: it never reports a sorted range as
    unsorted, but it can miss some local inversions, e.g. [2, 1, 3, 4, 5].

Public API (stable):
    is_sorted_linear(seq, compare, start_index=None, last_index=None) -> bool
    is_sorted_cocktail(seq, compare, start_index=None, last_index=None) -> bool
    is_sorted_divided(seq, compare, start_index=None, last_index=None) -> bool
    CHECKERS: dict[str, checker]
    get_checker(name) -> checker

Conventions:
- Ranges are half-open [start_index, last_index); omit both for the whole
  sequence.
- Invalid arguments (None / empty sequence, None comparator, bad range) give
  False without reading any element. Exceptions raised by `compare` itself
  propagate unchanged.
- Empty and single-element ranges are sorted.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from .comparisons import Comparator
from .preconditions import parameters_are_valid, resolve_range

__all__ = [
    "is_sorted_linear",
    "is_sorted_cocktail",
    "is_sorted_divided",
    "CHECKERS",
    "get_checker",
]

Checker = Callable[..., bool]


# ------------------------- public entry points ------------------------- #


def is_sorted_linear(
    seq: Sequence[Any],
    compare: Comparator,
    start_index: Optional[int] = None,
    last_index: Optional[int] = None,
) -> bool:
    """
    Check sortedness with a single left-to-right pass over adjacent pairs.

    Parameters
    ----------
    seq : sequence
        Indexable sequence to check. Not mutated.
    compare : callable
        Comparator `compare(a, b) -> int`.
    start_index : int, optional
        First index of the range (inclusive). Defaults to 0.
    last_index : int, optional
        End of the range (exclusive). Defaults to len(seq).

    Returns
    -------
    bool
        True iff no element in the range sorts after its successor.
        False on invalid arguments.
    """
    if not parameters_are_valid(seq, compare, start_index, last_index):
        return False
    start, last = resolve_range(seq, start_index, last_index)
    return _linear(seq, compare, start, last)


def is_sorted_cocktail(
    seq: Sequence[Any],
    compare: Comparator,
    start_index: Optional[int] = None,
    last_index: Optional[int] = None,
) -> bool:
    """
    Check sortedness from both ends of the range simultaneously.

    Same contract as `is_sorted_linear`; always returns the same answer.
    """
    if not parameters_are_valid(seq, compare, start_index, last_index):
        return False
    start, last = resolve_range(seq, start_index, last_index)
    return _cocktail(seq, compare, start, last)


def is_sorted_divided(
    seq: Sequence[Any],
    compare: Comparator,
    start_index: Optional[int] = None,
    last_index: Optional[int] = None,
) -> bool:
    """
    Check sortedness by splitting the range in two and partition-checking each half.

    Same argument contract as `is_sorted_linear`. Agrees with it on every
    sorted range, but may accept ranges with an inversion that the
    symmetric inward comparison never looks at (see module docstring).
    """
    if not parameters_are_valid(seq, compare, start_index, last_index):
        return False
    start, last = resolve_range(seq, start_index, last_index)
    return _divided(seq, compare, start, last)


CHECKERS: Dict[str, Checker] = {
    "linear": is_sorted_linear,
    "cocktail": is_sorted_cocktail,
    "divided": is_sorted_divided,
}


def get_checker(name: str) -> Checker:
    """Look up a checker by name; raises ValueError for unknown names."""
    try:
        return CHECKERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown checker: {name!r}. Supported: {sorted(CHECKERS)}"
        ) from None


# ------------------------- traversal strategies ------------------------- #
# These assume validated arguments.


def _linear(seq: Sequence[Any], compare: Comparator, start: int, last: int) -> bool:
    # Start one ahead so every index has a predecessor to compare with
    for i in range(start + 1, last):
        if compare(seq[i - 1], seq[i]) > 0:
            return False
    return True


def _cocktail(seq: Sequence[Any], compare: Comparator, start: int, last: int) -> bool:
    if last - start < 2:
        return True

    # ceil(n / 2) moves; on odd lengths the final move has lo == hi and
    # re-checks the two pairs around the middle element.
    moves = (last - start + 1) // 2
    lo = start
    hi = last - 1
    for _ in range(moves):
        if compare(seq[lo], seq[lo + 1]) > 0:
            return False
        if compare(seq[hi - 1], seq[hi]) > 0:
            return False
        lo += 1
        hi -= 1
    return True


def _divided(seq: Sequence[Any], compare: Comparator, start: int, last: int) -> bool:
    n = last - start
    if n < 2:
        return True

    left_end = mid = start + n // 2
    if n % 2 == 0:
        # Even length: the halves do not overlap, so check the seam directly
        left_end = mid - 1
        if compare(seq[left_end], seq[mid]) > 0:
            return False

    return _partition_sorted(seq, compare, start, left_end) and _partition_sorted(
        seq, compare, mid, last - 1
    )


def _partition_sorted(
    seq: Sequence[Any], compare: Comparator, lo: int, hi: int
) -> bool:
    """Compare seq[lo] with seq[hi] (both inclusive), then step both inward."""
    while lo < hi:
        if compare(seq[lo], seq[hi]) > 0:
            return False
        lo += 1
        hi -= 1
    return True

"""
Oracle for sorter correctness.

We use Python's built-in `sorted()` as the ground truth; a caller-supplied
comparator is adapted with `functools.cmp_to_key`.

Public API (stable):
    oracle_sort(seq, compare=None) -> list
    equals_oracle(seq, out, compare=None) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- `sorted` is stable, so with a comparator that ties distinct values the
  oracle output is one of several valid orders. `equals_oracle` is only a
  strict check for comparators that are total orders on the values present.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, List, Optional, Sequence

from .comparisons import Comparator

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle"]


def oracle_sort(seq: Sequence[Any], compare: Optional[Comparator] = None) -> List[Any]:
    """
    Return the ground-truth sorted output for `seq`.

    Parameters
    ----------
    seq : sequence
        Input values. Not mutated.
    compare : callable, optional
        Comparator; natural ascending order when omitted.

    Returns
    -------
    list
        A new list with the same elements, ordered by `compare`.
    """
    if compare is None:
        return sorted(seq)
    return sorted(seq, key=cmp_to_key(compare))


def equals_oracle(
    seq: Sequence[Any], out: Sequence[Any], compare: Optional[Comparator] = None
) -> bool:
    """True iff `out` equals `oracle_sort(seq, compare)` element-wise."""
    return list(out) == oracle_sort(seq, compare)

"""
Shared precondition gate for every order check and for the randomized sorter.

All public entry points call `parameters_are_valid` before touching a single
element. A rejected call is *not* an error: checkers answer False and the
sorter does nothing (fail-closed). Nothing in here raises.

Public API (stable):
    is_not_empty_or_none(seq) -> bool
    in_range_ii(value, lo, hi) -> bool     # lo <= value <= hi
    resolve_range(seq, start_index, last_index) -> tuple[int, int]
    parameters_are_valid(seq, compare, start_index=None, last_index=None) -> bool

Conventions:
- Ranges are half-open: [start_index, last_index).
- Passing neither index means "the whole sequence". Passing only one of them
  fills the other with 0 / len(seq).
- Indices must be Python or NumPy integers; bool is rejected even though it
  subclasses int.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

import numpy as np

__all__ = [
    "is_not_empty_or_none",
    "in_range_ii",
    "resolve_range",
    "parameters_are_valid",
]


def is_not_empty_or_none(seq: Optional[Sequence[Any]]) -> bool:
    """Return True iff `seq` is not None and holds at least one element."""
    return seq is not None and len(seq) > 0


def in_range_ii(value: int, lo: int, hi: int) -> bool:
    """Inclusive on both ends."""
    return lo <= value <= hi


def resolve_range(
    seq: Sequence[Any], start_index: Optional[int], last_index: Optional[int]
) -> Tuple[int, int]:
    """
    Fill in missing range bounds for `seq`.

    Does not validate anything; pair with `parameters_are_valid`.
    """
    start = 0 if start_index is None else int(start_index)
    last = len(seq) if last_index is None else int(last_index)
    return start, last


def parameters_are_valid(
    seq: Optional[Sequence[Any]],
    compare: Any,
    start_index: Optional[int] = None,
    last_index: Optional[int] = None,
) -> bool:
    """
    Decide whether a call may proceed.

    Parameters
    ----------
    seq : sequence | None
        The sequence under test. Must be non-None and non-empty.
    compare : callable | None
        The comparator. Must be a callable.
    start_index, last_index : int | None
        Optional half-open range. When either is given, the resolved range must
        satisfy 0 <= start_index <= last_index <= len(seq).

    Returns
    -------
    bool
        True if the arguments are acceptable, False otherwise. Never raises for
        bad arguments.
    """
    if not is_not_empty_or_none(seq) or compare is None or not callable(compare):
        return False

    if start_index is None and last_index is None:
        return True

    for idx in (start_index, last_index):
        if idx is not None and not _is_int_like(idx):
            return False

    start, last = resolve_range(seq, start_index, last_index)
    return in_range_ii(start, 0, last) and in_range_ii(last, start, len(seq))


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types, but not bools
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (int, np.integer))

"""
Improved bogo sort: an in-place randomized sort built only from a forward
scan and a uniform shuffle.

Algorithm
---------
Keep a ratchet index `pos`, starting at `start_index`. While `pos` has not
reached `last_index`:
    - take the element at `pos` as the pivot;
    - scan pos..last_index-1; if some element sorts before the pivot, shuffle
      [pos, last_index) uniformly and scan again from the same `pos`;
    - otherwise the pivot is a minimum of everything to its right, so
      [start_index, pos] is final and `pos` advances.

The confirmed prefix is never read or written again, so on return the whole
range is sorted. Each shuffle puts a minimum at `pos` with probability at
least 1 / (last_index - pos), so the loop terminates with probability 1, but
there is no upper bound on its running time. This is a worst-case baseline
for exercising the order checks, not a practical sorter; callers that need
a bound must impose their own deadline (see `sortcheck.bench.measure`).

Public API (stable):
    sort(seq, compare, start_index=None, last_index=None, *, rng=None, shuffle=None) -> None
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, MutableSequence, Optional

import numpy as np

from sortcheck.algorithms.shuffle import shuffle_range
from sortcheck.validate.comparisons import Comparator
from sortcheck.validate.preconditions import parameters_are_valid, resolve_range

__all__ = ["sort"]

logger = logging.getLogger(__name__)

Shuffle = Callable[[MutableSequence[Any], int, int], None]


def sort(
    seq: MutableSequence[Any],
    compare: Comparator,
    start_index: Optional[int] = None,
    last_index: Optional[int] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    shuffle: Optional[Shuffle] = None,
) -> None:
    """
    Sort seq[start_index:last_index] in place.

    Parameters
    ----------
    seq : mutable sequence
        Sequence to sort. Elements outside the range are untouched.
    compare : callable
        Comparator `compare(a, b) -> int`.
    start_index : int, optional
        First index of the range (inclusive). Defaults to 0.
    last_index : int, optional
        End of the range (exclusive). Defaults to len(seq).
    rng : numpy.random.Generator, optional
        RNG for the default shuffle. A fresh unseeded generator is used when
        omitted. Ignored if `shuffle` is given.
    shuffle : callable, optional
        Replacement shuffle primitive `shuffle(seq, start, last)`. It must
        permute exactly the given half-open range and be able to produce
        every ordering, otherwise the sort may never finish.

    Notes
    -----
    Invalid arguments (same gate as the order checks) make this a no-op.
    Exceptions raised by `compare` or `shuffle` propagate unchanged.
    """
    if not parameters_are_valid(seq, compare, start_index, last_index):
        return
    start, last = resolve_range(seq, start_index, last_index)

    if shuffle is None:
        shuffle = partial(shuffle_range, rng=rng if rng is not None else np.random.default_rng())

    pos = start
    shuffles = 0
    while pos < last:
        if _pivot_is_minimum(seq, compare, pos, last):
            pos += 1
        else:
            shuffle(seq, pos, last)
            shuffles += 1

    logger.debug(
        "improved_bogo: sorted [%d, %d) after %d shuffle(s)", start, last, shuffles
    )


def _pivot_is_minimum(
    seq: MutableSequence[Any], compare: Comparator, pos: int, last: int
) -> bool:
    pivot = seq[pos]
    for j in range(pos + 1, last):
        if compare(pivot, seq[j]) > 0:
            return False
    return True

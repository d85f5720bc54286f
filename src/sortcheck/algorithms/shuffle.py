"""
Uniform in-place shuffle over a half-open index range.

`random.shuffle` and `Generator.shuffle` only operate on whole sequences; the
randomized sorter needs to shuffle a suffix of a caller-owned sequence in
place. We let NumPy draw one permutation of the range and write a snapshot of
the range back through it.

We draw from a `numpy.random.Generator` rather than the `random` module so
that a seeded run (tests, benchmark sweeps) is reproducible from one RNG.
"""

from __future__ import annotations

from typing import Any, MutableSequence, Optional

import numpy as np

__all__ = ["shuffle_range"]


def shuffle_range(
    seq: MutableSequence[Any],
    start_index: int,
    last_index: int,
    rng: Optional[np.random.Generator] = None,
) -> None:
    """
    Shuffle seq[start_index:last_index] uniformly at random, in place.

    Indices outside the range are never read or written. Callers validate the
    range; an empty or single-element range is a no-op.
    """
    n = last_index - start_index
    if n < 2:
        return
    if rng is None:
        rng = np.random.default_rng()
    snapshot = [seq[i] for i in range(start_index, last_index)]
    for offset, src in enumerate(rng.permutation(n)):
        seq[start_index + offset] = snapshot[int(src)]

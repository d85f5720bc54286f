"""
Timing harness for order checks and the randomized sorter.

We measure exactly one call to `fn(seq, compare)` per sample, using a
monotonic high-resolution clock, and count comparator calls for the same
sample. All non-essential work (copying, GC, warmup) happens outside the
timed block.

`timeout_seconds` is an over-budget check made after each call returns, not
a deadline: a runaway call is never interrupted. Once a completed sample
exceeds the budget we stop sampling and report "timeout", and the runner
skips larger sizes for that target. Callers of the randomized sorter that
need a hard bound must impose it themselves (the tests use pytest-timeout).

Public API (stable):
    time_check_call(...) -> dict

Returned dict schema:
    {
        "name": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each completed sample
        "comparisons": list[int],           # comparator calls for each completed sample
        "verdict": bool | None,             # last return value if it was a bool
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List, Sequence

from sortcheck.validate.comparisons import Comparator, CountingComparator

__all__ = ["time_check_call"]

logger = logging.getLogger(__name__)


def time_check_call(
    *,
    name: str,
    fn: Callable[[Any, Comparator], Any],
    a: Sequence[Any],
    compare: Comparator,
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
    defensive_copy: bool,
) -> Dict[str, Any]:
    """
    Time repeated calls to `fn(a, compare)`.

    Parameters
    ----------
    name : str
        Logical name of the target (for logs/records).
    fn : Callable
        A checker (`is_sorted_*`) or an in-place sorter, called as fn(seq, compare).
    a : sequence
        Input sequence.
    compare : callable
        Comparator; wrapped in a CountingComparator for each sample.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call before timing.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample budget, checked after each call returns. A sample above it
        sets status="timeout" and stops further sampling.
    defensive_copy : bool
        If True, pass a fresh list copy of `a` to every call. Required for
        sorters, which would otherwise only sort on the first sample.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "name": name,
        "repeats": repeats,
        "samples_ns": [],  # type: List[int]
        "comparisons": [],  # type: List[int]
        "verdict": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    counting = CountingComparator(compare)

    # ---- Warmup (outside GC disable & outside timed block) ----
    if warmup and repeats > 0:
        try:
            fn(list(a) if defensive_copy else a, counting)
        except Exception as e:
            logger.warning("%s: warmup failed: %r", name, e)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            arg = list(a) if defensive_copy else a
            counting.reset()
            try:
                t0 = time.perf_counter_ns()
                out = fn(arg, counting)
                t1 = time.perf_counter_ns()
            except Exception as e:
                logger.warning("%s: run failed at repeat %d: %r", name, r, e)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result["samples_ns"].append(int(elapsed))
            result["comparisons"].append(counting.calls)
            if isinstance(out, bool):
                result["verdict"] = out

            if elapsed > threshold_ns:
                logger.warning(
                    "%s: sample %d took %.3fs (limit %.3fs); stopping",
                    name,
                    r,
                    elapsed / 1e9,
                    timeout_seconds,
                )
                result["status"] = "timeout"
                result["timed_out_on_repeat"] = r
                break
    finally:
        # Restore GC only if we were the ones who turned it off
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result

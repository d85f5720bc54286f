"""
Input generators for the order checks and the randomized sorter.

Currently implemented:
- dist == "sorted":
    Deterministic [0, 1, ..., n-1]. Every checker must accept it.

- dist == "reversed":
    Deterministic [n-1, n-2, ..., 0]. Every checker must reject it (n >= 2).

- dist == "single_swap":
    [0, 1, ..., n-1] with exactly one pair exchanged. By default the first
    and last elements are exchanged, which every checker (including the
    weaker "divided" check) rejects; params["i"] / params["j"] pick another
    pair.

- dist == "random":
    Integers drawn uniformly from an inclusive range.

- dist == "nearly_sorted":
    Start from [0..n-1] then perform ceil(swap_frac * n) random index swaps.

- dist == "few_uniques":
    Choose up to k distinct integers (uniform over an inclusive range), then
    fill the array by sampling among them. Produces lots of ties.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- Integer ranges in params["range"] are **inclusive** on both ends.
- Returns a Python `list[int]`; the checks only need indexing, so callers can
  wrap the result in whatever sequence type they want to exercise.
- The caller supplies the RNG (seeded upstream for reproducibility).
- Bad specs raise ValueError: these are configuration errors, unlike the
  fail-closed arguments of the checks themselves.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "sorted",
    "reversed",
    "single_swap",
    "random",
    "nearly_sorted",
    "few_uniques",
}
__all__ = ["SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification.

        Sorted / reversed:
            {"dist": "sorted"}      # or "reversed"; params unused

        Single swap:
            {
                "dist": "single_swap",
                "params": {"i": 0, "j": -1}            # optional; default first/last
            }

        Random:
            {
                "dist": "random",
                "params": {"range": [min_int, max_int]}  # inclusive
            }

        Nearly-sorted:
            {
                "dist": "nearly_sorted",
                "params": {"swap_frac": 0.05}          # in [0.0, 1.0]
            }

        Few-uniques:
            {
                "dist": "few_uniques",
                "params": {
                    "k": 4,                            # desired #unique values (>=1)
                    "range": [min_int, max_int]        # optional; default [0, 1000]
                }
            }

    rng : numpy.random.Generator
        Random number generator owned by the caller. Unused by the
        deterministic distributions.

    Returns
    -------
    list[int]
        A list of length `n`.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict if provided")

    if dist == "sorted":
        return list(range(n))

    if dist == "reversed":
        return list(range(n - 1, -1, -1))

    if dist == "single_swap":
        arr = list(range(n))
        if n < 2:
            return arr
        i, j = _parse_swap_pair(params, n)
        arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "random":
        lo, hi = _parse_inclusive_range(params, required=True)
        if n == 0:
            return []
        # Generator.integers is half-open [low, high); +1 makes it inclusive
        arr = rng.integers(lo, hi + 1, size=n, dtype=np.int64)
        return arr.tolist()

    if dist == "nearly_sorted":
        swap_frac = _parse_swap_frac(params)
        arr = list(range(n))
        # ceil so any nonzero fraction makes at least one swap
        num_swaps = int(np.ceil(swap_frac * n))
        if n == 0 or num_swaps <= 0:
            return arr
        idxs = rng.integers(0, n, size=2 * num_swaps)
        for k in range(num_swaps):
            i = int(idxs[2 * k])
            j = int(idxs[2 * k + 1])
            # i == j is a no-op swap, so the effective count may be lower
            arr[i], arr[j] = arr[j], arr[i]
        return arr

    if dist == "few_uniques":
        k = _parse_k(params)
        lo, hi = _parse_inclusive_range(params, required=False, default=(0, 1000))
        if n == 0:
            return []
        actual_k = int(min(k, n, hi - lo + 1))
        # Draw without replacement from the same RNG to stay reproducible
        values = rng.choice(np.arange(lo, hi + 1, dtype=np.int64), size=actual_k, replace=False)
        idxs = rng.integers(0, actual_k, size=n)
        return [int(values[int(t)]) for t in idxs]

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not _is_int_like(n) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _parse_inclusive_range(
    params: Dict[str, Any], required: bool, default: Tuple[int, int] = (0, 0)
) -> Tuple[int, int]:
    """
    Parse params["range"] == [min_int, max_int] (both inclusive).

    When `required` is False and the key is absent, return `default`.
    """
    if "range" not in params:
        if required:
            raise ValueError("params.range must be provided as [min, max] (inclusive)")
        return default

    spec = params["range"]
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError("params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = spec
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError("params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_swap_frac(params: Dict[str, Any]) -> float:
    """Parse swap_frac in [0.0, 1.0]; default 0.05."""
    val = params.get("swap_frac", 0.05)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"nearly_sorted.params.swap_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(f"nearly_sorted.params.swap_frac must be in [0.0, 1.0]; got {x}")
    return x


def _parse_k(params: Dict[str, Any]) -> int:
    if "k" not in params:
        raise ValueError("few_uniques.params.k must be provided (int >= 1)")
    k = params["k"]
    if not _is_int_like(k) or isinstance(k, bool) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    return int(k)


def _parse_swap_pair(params: Dict[str, Any], n: int) -> Tuple[int, int]:
    """
    Parse the pair of positions to exchange; negative values count from the end.
    """
    raw = (params.get("i", 0), params.get("j", -1))
    out = []
    for name, v in zip(("i", "j"), raw):
        if not _is_int_like(v) or isinstance(v, bool):
            raise ValueError(f"single_swap.params.{name} must be an integer; got {v!r}")
        idx = int(v) + n if v < 0 else int(v)
        if not (0 <= idx < n):
            raise ValueError(f"single_swap.params.{name} out of range for n={n}: {v}")
        out.append(idx)
    if out[0] == out[1]:
        raise ValueError("single_swap.params.i and j must name different positions")
    return out[0], out[1]


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer))

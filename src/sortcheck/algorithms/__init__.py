"""
Algorithms package public API.

Re-exports:
    randomized_sort   # sortcheck.algorithms.improved_bogo.sort
    shuffle_range
"""

from .improved_bogo import sort as randomized_sort
from .shuffle import shuffle_range

__all__ = ["randomized_sort", "shuffle_range"]

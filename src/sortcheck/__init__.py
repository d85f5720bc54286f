"""
sortcheck: order checks and a randomized worst-case sorter.

Typical use:
    from sortcheck import is_sorted_linear, compare_min_to_max
    is_sorted_linear([1, 2, 3], compare_min_to_max)          # True
    is_sorted_linear([1, 3, 2], compare_min_to_max, 0, 2)    # True
"""

from sortcheck.algorithms import randomized_sort, shuffle_range
from sortcheck.validate import (
    CHECKERS,
    CountingComparator,
    compare_max_to_min,
    compare_min_to_max,
    get_checker,
    is_sorted_cocktail,
    is_sorted_divided,
    is_sorted_linear,
    parameters_are_valid,
)

__version__ = "0.1.0"

__all__ = [
    "is_sorted_linear",
    "is_sorted_cocktail",
    "is_sorted_divided",
    "randomized_sort",
    "shuffle_range",
    "parameters_are_valid",
    "compare_min_to_max",
    "compare_max_to_min",
    "CountingComparator",
    "CHECKERS",
    "get_checker",
]

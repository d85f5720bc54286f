"""
Validation utilities public API.

Re-exports:
    - Order checks:
        is_sorted_linear
        is_sorted_cocktail
        is_sorted_divided
        CHECKERS
        get_checker

    - Preconditions:
        parameters_are_valid

    - Comparators:
        compare_min_to_max
        compare_max_to_min
        CountingComparator

    - Oracle:
        ORACLE_NAME
        oracle_sort
        equals_oracle

    - Property checks:
        first_violation_index
        is_permutation
        permutation_counter_diff
        assert_no_mutation
        assert_untouched_outside
"""

from .comparisons import CountingComparator, compare_max_to_min, compare_min_to_max
from .oracle import ORACLE_NAME, equals_oracle, oracle_sort
from .order import (
    CHECKERS,
    get_checker,
    is_sorted_cocktail,
    is_sorted_divided,
    is_sorted_linear,
)
from .preconditions import parameters_are_valid
from .properties import (
    assert_no_mutation,
    assert_untouched_outside,
    first_violation_index,
    is_permutation,
    permutation_counter_diff,
)

__all__ = [
    "is_sorted_linear",
    "is_sorted_cocktail",
    "is_sorted_divided",
    "CHECKERS",
    "get_checker",
    "parameters_are_valid",
    "compare_min_to_max",
    "compare_max_to_min",
    "CountingComparator",
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "first_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "assert_no_mutation",
    "assert_untouched_outside",
]

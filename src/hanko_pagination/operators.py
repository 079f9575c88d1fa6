"""Filter operators accepted via the ``filter`` query parameter."""

from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Supported comparison operators for filter predicates."""

    EQ = "=="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    ARRAY_CONTAINS = "array-contains"


# Scan order used when splitting a predicate. Operators that contain another
# operator's symbol come first.
OPERATOR_PRIORITY: tuple[FilterOperator, ...] = (
    FilterOperator.ARRAY_CONTAINS,
    FilterOperator.GE,
    FilterOperator.LE,
    FilterOperator.EQ,
    FilterOperator.GT,
    FilterOperator.LT,
)

SUPPORTED_OPERATORS: frozenset[FilterOperator] = frozenset(FilterOperator)

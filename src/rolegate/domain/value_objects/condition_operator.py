"""Operators for record-level permission conditions."""

from enum import StrEnum


class ConditionOperator(StrEnum):
    """Comparison applied between a record field and a condition value."""

    EQUALS = "equals"
    IN = "in"
    CONTAINS = "contains"


def is_valid_condition_operator(value: object) -> bool:
    """Check whether value names a known operator."""
    return isinstance(value, str) and value in ConditionOperator._value2member_map_

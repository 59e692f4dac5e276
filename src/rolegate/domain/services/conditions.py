"""Record-level condition evaluation."""

from collections.abc import Mapping
from typing import Any

from rolegate.domain.entities import CURRENT_USER, PermissionCondition
from rolegate.domain.value_objects import ConditionOperator


def resolve_condition_value(condition: PermissionCondition, current_user_id: str | None) -> Any:
    """Substitute ``$currentUser`` with the caller's id when one is known."""
    if condition.value == CURRENT_USER and current_user_id:
        return current_user_id
    return condition.value


def evaluate_condition(
    condition: PermissionCondition,
    record: Mapping[str, Any],
    current_user_id: str | None = None,
) -> bool:
    """Evaluate condition against record. Malformed input evaluates to False."""
    if not isinstance(record, Mapping):
        return False

    field_value = record.get(condition.field)
    expected = resolve_condition_value(condition, current_user_id)

    match condition.operator:
        case ConditionOperator.EQUALS:
            return _strict_equals(field_value, expected)
        case ConditionOperator.IN:
            if isinstance(field_value, (list, tuple)):
                return any(_strict_equals(item, expected) for item in field_value)
            return False
        case ConditionOperator.CONTAINS:
            if isinstance(field_value, str) and isinstance(expected, str):
                return expected in field_value
            return False
        case _:
            return False


def _strict_equals(left: Any, right: Any) -> bool:
    # no coercion: 1 != "1" and True != 1
    return type(left) is type(right) and left == right

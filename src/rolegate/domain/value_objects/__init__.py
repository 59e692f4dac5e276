"""Domain value objects."""

from rolegate.domain.value_objects.condition_operator import (
    ConditionOperator,
    is_valid_condition_operator,
)
from rolegate.domain.value_objects.permission_name import (
    PermissionName,
    admin_permission_name,
    global_permission_name,
    schema_permission_name,
)
from rolegate.domain.value_objects.permission_scope import (
    PermissionScope,
    is_valid_permission_scope,
)
from rolegate.domain.value_objects.resource_type import (
    ResourceType,
    is_valid_resource_type,
)

__all__ = [
    "ConditionOperator",
    "PermissionName",
    "PermissionScope",
    "ResourceType",
    "admin_permission_name",
    "global_permission_name",
    "is_valid_condition_operator",
    "is_valid_permission_scope",
    "is_valid_resource_type",
    "schema_permission_name",
]

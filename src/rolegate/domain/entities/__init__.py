"""Domain entities."""

from rolegate.domain.entities.permission import (
    CURRENT_USER,
    Permission,
    PermissionCondition,
    PermissionResource,
)
from rolegate.domain.entities.resolved_permissions import (
    FieldPermission,
    PermissionContext,
    RecordPermission,
    ResolvedPermissions,
)
from rolegate.domain.entities.role import Role

__all__ = [
    "CURRENT_USER",
    "FieldPermission",
    "Permission",
    "PermissionCondition",
    "PermissionContext",
    "PermissionResource",
    "RecordPermission",
    "ResolvedPermissions",
    "Role",
]

"""Permission scopes - the action being authorized."""

from enum import StrEnum


class PermissionScope(StrEnum):
    """Actions a permission can grant."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    PUBLISH = "publish"


def is_valid_permission_scope(value: object) -> bool:
    """Check whether value names a known scope."""
    return isinstance(value, str) and value in PermissionScope._value2member_map_

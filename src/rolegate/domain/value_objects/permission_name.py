"""Permission name conventions: ``category:target:scope``."""

from dataclasses import dataclass

from rolegate.domain.value_objects.permission_scope import PermissionScope


@dataclass(frozen=True)
class PermissionName:
    """Parsed permission name."""

    category: str
    target: str
    scope: str

    def __str__(self) -> str:
        return f"{self.category}:{self.target}:{self.scope}"

    @classmethod
    def parse(cls, name: str) -> "PermissionName | None":
        """Split a permission name into its parts, None if malformed."""
        parts = name.split(":")
        if len(parts) != 3 or not all(parts):
            return None
        return cls(category=parts[0], target=parts[1], scope=parts[2])


def global_permission_name(scope: PermissionScope) -> str:
    return f"global:{scope.value}"


def schema_permission_name(schema: str, scope: PermissionScope) -> str:
    return f"content:{schema}:{scope.value}"


def admin_permission_name(resource: str, scope: PermissionScope) -> str:
    return f"admin:{resource}:{scope.value}"

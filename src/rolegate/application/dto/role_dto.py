"""Role DTOs."""

from dataclasses import dataclass, field
from typing import Any

from rolegate.domain.exceptions import ValidationError


def _str_list(body: dict[str, Any], key: str) -> list[str] | None:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{key} must be a list of strings")
    return list(dict.fromkeys(value))


@dataclass
class RoleCreateInput:
    """Input for creating a role."""

    name: str
    display_name: str
    description: str | None = None
    permissions: list[str] = field(default_factory=list)
    inherits_from: list[str] = field(default_factory=list)
    is_system: bool = False
    priority: int = 0

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "RoleCreateInput":
        try:
            name = body["name"]
        except KeyError as e:
            raise ValidationError(f"Missing required field: {e}") from e
        if not isinstance(name, str) or not name:
            raise ValidationError("name must be a non-empty string")
        priority = body.get("priority", 0)
        if not isinstance(priority, int) or isinstance(priority, bool):
            raise ValidationError("priority must be an integer")
        return cls(
            name=name,
            display_name=body.get("displayName") or name,
            description=body.get("description"),
            permissions=_str_list(body, "permissions") or [],
            inherits_from=_str_list(body, "inheritsFrom") or [],
            is_system=bool(body.get("isSystem", False)),
            priority=priority,
        )


@dataclass
class RoleUpdateInput:
    """Partial update for a role; None means unchanged."""

    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    permissions: list[str] | None = None
    inherits_from: list[str] | None = None
    priority: int | None = None

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "RoleUpdateInput":
        priority = body.get("priority")
        if priority is not None and (not isinstance(priority, int) or isinstance(priority, bool)):
            raise ValidationError("priority must be an integer")
        return cls(
            name=body.get("name"),
            display_name=body.get("displayName"),
            description=body.get("description"),
            permissions=_str_list(body, "permissions"),
            inherits_from=_str_list(body, "inheritsFrom"),
            priority=priority,
        )

    def to_patch(self) -> dict[str, Any]:
        """Fields to change, keyed by Role attribute name."""
        return {k: v for k, v in self.__dict__.items() if v is not None}

"""Permission DTOs."""

from dataclasses import dataclass
from typing import Any

from rolegate.domain.entities import PermissionCondition, PermissionResource
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.value_objects import (
    PermissionScope,
    ResourceType,
    is_valid_condition_operator,
    is_valid_permission_scope,
    is_valid_resource_type,
)


def parse_scope(value: Any) -> PermissionScope:
    """Validate and convert a scope string."""
    if not is_valid_permission_scope(value):
        raise ValidationError(f"Invalid permission scope: {value}")
    return PermissionScope(value)


def parse_resource(data: Any) -> PermissionResource:
    """Validate and convert a resource body."""
    if not isinstance(data, dict):
        raise ValidationError("resource must be an object")
    if not is_valid_resource_type(data.get("type")):
        raise ValidationError(f"Invalid resource type: {data.get('type')}")

    fields = data.get("fields")
    if fields is not None and (
        not isinstance(fields, list) or not all(isinstance(f, str) for f in fields)
    ):
        raise ValidationError("resource.fields must be a list of strings")

    conditions = data.get("conditions")
    parsed_conditions: list[PermissionCondition] | None = None
    if conditions is not None:
        if not isinstance(conditions, list):
            raise ValidationError("resource.conditions must be a list")
        parsed_conditions = []
        for c in conditions:
            if (
                not isinstance(c, dict)
                or not isinstance(c.get("field"), str)
                or not isinstance(c.get("value"), str)
                or not is_valid_condition_operator(c.get("operator"))
            ):
                raise ValidationError(f"Invalid permission condition: {c}")
            parsed_conditions.append(PermissionCondition.from_dict(c))

    return PermissionResource(
        type=ResourceType(data["type"]),
        target=data.get("target"),
        fields=list(fields) if fields is not None else None,
        conditions=parsed_conditions,
    )


@dataclass
class PermissionCreateInput:
    """Input for creating a permission."""

    name: str
    display_name: str
    scope: str
    resource: dict[str, Any]
    description: str | None = None
    is_system: bool = False

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "PermissionCreateInput":
        try:
            name = body["name"]
            scope = body["scope"]
            resource = body["resource"]
        except KeyError as e:
            raise ValidationError(f"Missing required field: {e}") from e
        if not isinstance(name, str) or not name:
            raise ValidationError("name must be a non-empty string")
        return cls(
            name=name,
            display_name=body.get("displayName") or name,
            scope=scope,
            resource=resource,
            description=body.get("description"),
            is_system=bool(body.get("isSystem", False)),
        )


@dataclass
class PermissionUpdateInput:
    """Partial update for a permission; None means unchanged."""

    name: str | None = None
    display_name: str | None = None
    description: str | None = None
    scope: str | None = None
    resource: dict[str, Any] | None = None

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "PermissionUpdateInput":
        return cls(
            name=body.get("name"),
            display_name=body.get("displayName"),
            description=body.get("description"),
            scope=body.get("scope"),
            resource=body.get("resource"),
        )

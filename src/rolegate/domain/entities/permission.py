"""Permission entity - a scope granted on a resource level."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from rolegate.domain.value_objects import ConditionOperator, PermissionScope, ResourceType

CURRENT_USER = "$currentUser"


@dataclass(frozen=True)
class PermissionCondition:
    """Record-level condition: ``record[field] <operator> value``.

    ``value`` may be the ``$currentUser`` placeholder, resolved to the
    caller's id at evaluation time.
    """

    field: str
    operator: ConditionOperator | str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "operator": str(self.operator), "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermissionCondition":
        operator = data["operator"]
        if operator in ConditionOperator._value2member_map_:
            operator = ConditionOperator(operator)
        return cls(field=data["field"], operator=operator, value=data["value"])


@dataclass
class PermissionResource:
    """What a permission applies to."""

    type: ResourceType
    target: str | None = None
    fields: list[str] | None = None
    conditions: list[PermissionCondition] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value}
        if self.target is not None:
            data["target"] = self.target
        if self.fields is not None:
            data["fields"] = list(self.fields)
        if self.conditions is not None:
            data["conditions"] = [c.to_dict() for c in self.conditions]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermissionResource":
        conditions = data.get("conditions")
        return cls(
            type=ResourceType(data["type"]),
            target=data.get("target"),
            fields=list(data["fields"]) if data.get("fields") is not None else None,
            conditions=(
                [PermissionCondition.from_dict(c) for c in conditions]
                if conditions is not None
                else None
            ),
        )


@dataclass
class Permission:
    """Permission - grants ``scope`` on ``resource``. System permissions keep their name."""

    id: str
    name: str
    display_name: str
    scope: PermissionScope
    resource: PermissionResource
    description: str | None = None
    is_system: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "scope": self.scope.value,
            "resource": self.resource.to_dict(),
            "isSystem": self.is_system,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

"""Resolved permissions - flattened snapshot used for authorization checks."""

from dataclasses import dataclass, field
from typing import Any

from rolegate.domain.entities.permission import PermissionCondition
from rolegate.domain.value_objects import PermissionScope


@dataclass(frozen=True)
class FieldPermission:
    """Visibility of a single field."""

    visible: bool = True
    readonly: bool = False

    def to_dict(self) -> dict[str, bool]:
        return {"visible": self.visible, "readonly": self.readonly}


@dataclass(frozen=True)
class RecordPermission:
    """Scope granted on records matching ``condition``."""

    scope: PermissionScope
    condition: PermissionCondition

    def to_dict(self) -> dict[str, Any]:
        return {"scope": self.scope.value, "condition": self.condition.to_dict()}


@dataclass
class ResolvedPermissions:
    """Everything a role-id set is allowed to do. Derived, never persisted."""

    global_scopes: list[PermissionScope] = field(default_factory=list)
    schemas: dict[str, list[PermissionScope]] = field(default_factory=dict)
    fields: dict[str, dict[str, FieldPermission]] = field(default_factory=dict)
    records: dict[str, list[RecordPermission]] = field(default_factory=dict)
    role_ids: list[str] = field(default_factory=list)
    role_names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "global": [s.value for s in self.global_scopes],
            "schemas": {k: [s.value for s in v] for k, v in self.schemas.items()},
            "fields": {
                target: {name: fp.to_dict() for name, fp in perms.items()}
                for target, perms in self.fields.items()
            },
            "records": {k: [rp.to_dict() for rp in v] for k, v in self.records.items()},
            "roleIds": list(self.role_ids),
            "roleNames": list(self.role_names),
        }


@dataclass
class PermissionContext:
    """Extra input for record-level checks."""

    record: dict[str, Any] | None = None
    current_user_id: str | None = None

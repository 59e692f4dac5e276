"""Role entity for RBAC."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Role:
    """Role - a named bundle of permission ids, optionally inheriting other roles.

    ``priority`` is informational; aggregation is a plain union.
    """

    id: str
    name: str
    display_name: str
    description: str | None = None
    permissions: list[str] = field(default_factory=list)
    inherits_from: list[str] = field(default_factory=list)
    is_system: bool = False
    priority: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "permissions": list(self.permissions),
            "inheritsFrom": list(self.inherits_from),
            "isSystem": self.is_system,
            "priority": self.priority,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

"""Update permission use case."""

from datetime import UTC, datetime
from typing import Any

from rolegate.application.dto.permission_dto import (
    PermissionUpdateInput,
    parse_resource,
    parse_scope,
)
from rolegate.application.ports import PermissionCache
from rolegate.domain.entities import Permission
from rolegate.domain.exceptions import SystemEntityImmutable, ValidationError


class UpdatePermissionUseCase:
    """Update a permission; system permissions keep their name."""

    def __init__(self, unit_of_work_factory: type, permission_cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(
        self, permission_id: str, data: PermissionUpdateInput
    ) -> Permission | None:
        """Apply the update. Returns None when the permission does not exist."""
        patch: dict[str, Any] = {}
        if data.scope is not None:
            patch["scope"] = parse_scope(data.scope)
        if data.resource is not None:
            patch["resource"] = parse_resource(data.resource)
        if data.display_name is not None:
            patch["display_name"] = data.display_name
        if data.description is not None:
            patch["description"] = data.description

        async with self._uow_factory() as uow:
            existing = await uow.permissions.get_by_id(permission_id)
            if existing is None:
                return None

            if data.name is not None and data.name != existing.name:
                if existing.is_system:
                    raise SystemEntityImmutable("Cannot change name of system permissions")
                other = await uow.permissions.get_by_name(data.name)
                if other is not None and other.id != permission_id:
                    raise ValidationError(f"Permission name already exists: {data.name}")
                patch["name"] = data.name

            patch["updated_at"] = datetime.now(UTC)
            permission = await uow.permissions.update(permission_id, patch)

        self._cache.invalidate()
        return permission

"""Create permission use case."""

from datetime import UTC, datetime
from uuid import uuid4

from rolegate.application.dto.permission_dto import (
    PermissionCreateInput,
    parse_resource,
    parse_scope,
)
from rolegate.application.ports import PermissionCache
from rolegate.domain.entities import Permission
from rolegate.domain.exceptions import ValidationError


class CreatePermissionUseCase:
    """Create a permission and clear the permission cache."""

    def __init__(self, unit_of_work_factory: type, permission_cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(self, data: PermissionCreateInput) -> Permission:
        """Validate scope and resource, then persist."""
        scope = parse_scope(data.scope)
        resource = parse_resource(data.resource)

        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_name(data.name):
                raise ValidationError(f"Permission name already exists: {data.name}")

            now = datetime.now(UTC)
            permission = Permission(
                id=str(uuid4()),
                name=data.name,
                display_name=data.display_name,
                description=data.description,
                scope=scope,
                resource=resource,
                is_system=data.is_system,
                created_at=now,
                updated_at=now,
            )
            permission = await uow.permissions.create(permission)

        self._cache.invalidate()
        return permission

"""Create role use case."""

from datetime import UTC, datetime
from uuid import uuid4

from rolegate.application.dto.role_dto import RoleCreateInput
from rolegate.application.ports import PermissionCache
from rolegate.domain.entities import Role
from rolegate.domain.exceptions import ValidationError


class CreateRoleUseCase:
    """Create a role and clear the permission cache."""

    def __init__(self, unit_of_work_factory: type, permission_cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(self, data: RoleCreateInput) -> Role:
        """Persist a new role. Role names are unique."""
        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(data.name):
                raise ValidationError(f"Role name already exists: {data.name}")

            now = datetime.now(UTC)
            role = Role(
                id=str(uuid4()),
                name=data.name,
                display_name=data.display_name,
                description=data.description,
                permissions=list(dict.fromkeys(data.permissions)),
                inherits_from=list(dict.fromkeys(data.inherits_from)),
                is_system=data.is_system,
                priority=data.priority,
                created_at=now,
                updated_at=now,
            )
            role = await uow.roles.create(role)

        # a new role may be referenced by any existing role
        self._cache.invalidate()
        return role

"""Delete role use case."""

from rolegate.application.ports import PermissionCache
from rolegate.domain.exceptions import SystemEntityImmutable


class DeleteRoleUseCase:
    """Delete a non-system role."""

    def __init__(self, unit_of_work_factory: type, permission_cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(self, role_id: str) -> bool:
        """Delete role. Returns False when it does not exist."""
        async with self._uow_factory() as uow:
            existing = await uow.roles.get_by_id(role_id)
            if existing is not None and existing.is_system:
                raise SystemEntityImmutable("Cannot delete system roles")
            deleted = await uow.roles.delete(role_id)

        self._cache.invalidate()
        return deleted

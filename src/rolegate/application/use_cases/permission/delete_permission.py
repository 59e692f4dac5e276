"""Delete permission use case."""

from rolegate.application.ports import PermissionCache
from rolegate.domain.exceptions import SystemEntityImmutable


class DeletePermissionUseCase:
    """Delete a non-system permission."""

    def __init__(self, unit_of_work_factory: type, permission_cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(self, permission_id: str) -> bool:
        """Delete permission. Returns False when it does not exist."""
        async with self._uow_factory() as uow:
            existing = await uow.permissions.get_by_id(permission_id)
            if existing is not None and existing.is_system:
                raise SystemEntityImmutable("Cannot delete system permissions")
            deleted = await uow.permissions.delete(permission_id)

        self._cache.invalidate()
        return deleted

"""Remove permissions from a role."""

from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.domain.entities import Role


class RevokeRolePermissionsUseCase:
    """Remove permission ids from a role."""

    def __init__(self, unit_of_work_factory: type, update_role: UpdateRoleUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._update_role = update_role

    async def execute(self, role_id: str, permission_ids: list[str]) -> Role | None:
        """Drop permission_ids from the role. None when the role is missing."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
        if role is None:
            return None

        removed = set(permission_ids)
        remaining = [p for p in role.permissions if p not in removed]
        return await self._update_role.execute(role_id, {"permissions": remaining})

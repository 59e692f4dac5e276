"""Assign permissions to a role."""

from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.domain.entities import Role


class AssignRolePermissionsUseCase:
    """Add permission ids to a role, keeping existing ones."""

    def __init__(self, unit_of_work_factory: type, update_role: UpdateRoleUseCase) -> None:
        self._uow_factory = unit_of_work_factory
        self._update_role = update_role

    async def execute(self, role_id: str, permission_ids: list[str]) -> Role | None:
        """Merge permission_ids into the role. None when the role is missing."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
        if role is None:
            return None

        merged = list(dict.fromkeys([*role.permissions, *permission_ids]))
        return await self._update_role.execute(role_id, {"permissions": merged})

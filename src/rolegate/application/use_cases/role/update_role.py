"""Update role use case."""

from datetime import UTC, datetime
from typing import Any

from rolegate.application.dto.role_dto import RoleUpdateInput
from rolegate.application.ports import PermissionCache
from rolegate.domain.entities import Role
from rolegate.domain.exceptions import SystemEntityImmutable, ValidationError


class UpdateRoleUseCase:
    """Update a role; system roles keep their name."""

    def __init__(self, unit_of_work_factory: type, permission_cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache

    async def execute(self, role_id: str, data: RoleUpdateInput | dict[str, Any]) -> Role | None:
        """Apply the patch. Returns None when the role does not exist."""
        patch = data.to_patch() if isinstance(data, RoleUpdateInput) else dict(data)

        async with self._uow_factory() as uow:
            existing = await uow.roles.get_by_id(role_id)
            if existing is None:
                return None

            new_name = patch.get("name")
            if new_name is not None and new_name != existing.name:
                if existing.is_system:
                    raise SystemEntityImmutable("Cannot change name of system roles")
                other = await uow.roles.get_by_name(new_name)
                if other is not None and other.id != role_id:
                    raise ValidationError(f"Role name already exists: {new_name}")

            for key in ("permissions", "inherits_from"):
                if key in patch:
                    patch[key] = list(dict.fromkeys(patch[key]))
            patch["updated_at"] = datetime.now(UTC)

            role = await uow.roles.update(role_id, patch)

        self._cache.invalidate()
        return role

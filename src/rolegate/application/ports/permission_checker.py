"""Permission checker port - RBAC authorization."""

from collections.abc import Iterable
from typing import Protocol

from rolegate.domain.entities import FieldPermission, PermissionContext, ResolvedPermissions
from rolegate.domain.value_objects import PermissionScope


class PermissionChecker(Protocol):
    """Port for authorization decisions over a user's role ids."""

    async def resolve(self, role_ids: list[str]) -> ResolvedPermissions: ...

    async def has_permission(
        self,
        role_ids: list[str],
        scope: PermissionScope | str,
        resource: str,
        context: PermissionContext | None = None,
    ) -> bool: ...

    async def has_schema_permission(
        self, role_ids: list[str], schema: str, scope: PermissionScope | str
    ) -> bool: ...

    async def has_any_permission(
        self,
        role_ids: list[str],
        scopes: Iterable[PermissionScope | str],
        resource: str,
        context: PermissionContext | None = None,
        owner_field: str | None = None,
    ) -> bool: ...

    async def get_field_permissions(
        self, role_ids: list[str], schema: str
    ) -> dict[str, FieldPermission]: ...

    def invalidate(self, role_ids: list[str] | None = None) -> None: ...

"""Permission repository port."""

from collections.abc import Iterable
from typing import Any, Protocol

from rolegate.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def get_by_id(self, permission_id: str) -> Permission | None: ...

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def list_all(self) -> list[Permission]: ...

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def update(self, permission_id: str, patch: dict[str, Any]) -> Permission | None: ...

    async def delete(self, permission_id: str) -> bool: ...

"""Role repository port."""

from typing import Any, Protocol

from rolegate.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence."""

    async def get_by_id(self, role_id: str) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def list_all(self) -> list[Role]: ...

    async def count(self) -> int: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role_id: str, patch: dict[str, Any]) -> Role | None: ...

    async def delete(self, role_id: str) -> bool: ...

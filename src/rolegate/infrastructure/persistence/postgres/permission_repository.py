"""PostgreSQL permission repository implementation."""

from collections.abc import Iterable
from typing import Any

from psycopg import AsyncConnection, sql
from psycopg.types.json import Jsonb

from rolegate.domain.entities import Permission, PermissionResource
from rolegate.domain.value_objects import PermissionScope

_COLUMNS = (
    "id, name, display_name, description, scope, resource, "
    "is_system, created_at, updated_at"
)
_UPDATABLE = {"name", "display_name", "description", "scope", "resource", "updated_at"}


def _row_to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        name=r[1],
        display_name=r[2],
        description=r[3],
        scope=PermissionScope(r[4]),
        resource=PermissionResource.from_dict(r[5]),
        is_system=r[6],
        created_at=r[7],
        updated_at=r[8],
    )


def _to_db(key: str, value: Any) -> Any:
    if key == "resource":
        return Jsonb(value.to_dict())
    if key == "scope":
        return str(value)
    return value


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: str) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def get_by_name(self, name: str) -> Permission | None:
        """Get permission by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_permission(r) if r else None

    async def list_all(self) -> list[Permission]:
        """List all permissions."""
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM permission ORDER BY name")
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        """List permissions with the given ids; unknown ids are skipped."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = ANY(%s)",
            (list(permission_ids),),
        )
        rows = await cur.fetchall()
        return [_row_to_permission(r) for r in rows]

    async def create(self, permission: Permission) -> Permission:
        """Create permission."""
        await self._conn.execute(
            f"INSERT INTO permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                permission.id,
                permission.name,
                permission.display_name,
                permission.description,
                permission.scope.value,
                Jsonb(permission.resource.to_dict()),
                permission.is_system,
                permission.created_at,
                permission.updated_at,
            ),
        )
        return permission

    async def update(self, permission_id: str, patch: dict[str, Any]) -> Permission | None:
        """Update the given columns, return the stored permission."""
        fields = {k: v for k, v in patch.items() if k in _UPDATABLE}
        if fields:
            assignments = sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(k)) for k in fields
            )
            await self._conn.execute(
                sql.SQL("UPDATE permission SET {} WHERE id = %s").format(assignments),
                (*(_to_db(k, v) for k, v in fields.items()), permission_id),
            )
        return await self.get_by_id(permission_id)

    async def delete(self, permission_id: str) -> bool:
        """Delete permission."""
        cur = await self._conn.execute(
            "DELETE FROM permission WHERE id = %s",
            (permission_id,),
        )
        return cur.rowcount > 0

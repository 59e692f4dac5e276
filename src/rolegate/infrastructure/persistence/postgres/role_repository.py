"""PostgreSQL role repository implementation."""

from typing import Any

from psycopg import AsyncConnection, sql
from psycopg.types.json import Jsonb

from rolegate.domain.entities import Role

_COLUMNS = (
    "id, name, display_name, description, permissions, inherits_from, "
    "is_system, priority, created_at, updated_at"
)
_JSON_FIELDS = {"permissions", "inherits_from"}
_UPDATABLE = {
    "name",
    "display_name",
    "description",
    "permissions",
    "inherits_from",
    "priority",
    "updated_at",
}


def _row_to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        display_name=r[2],
        description=r[3],
        permissions=list(r[4] or []),
        inherits_from=list(r[5] or []),
        is_system=r[6],
        priority=r[7],
        created_at=r[8],
        updated_at=r[9],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: str) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _row_to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles, highest priority first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role ORDER BY priority DESC, name"
        )
        rows = await cur.fetchall()
        return [_row_to_role(r) for r in rows]

    async def count(self) -> int:
        """Number of roles."""
        cur = await self._conn.execute("SELECT count(*) FROM role")
        r = await cur.fetchone()
        return r[0]

    async def create(self, role: Role) -> Role:
        """Create role."""
        await self._conn.execute(
            f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                role.id,
                role.name,
                role.display_name,
                role.description,
                Jsonb(role.permissions),
                Jsonb(role.inherits_from),
                role.is_system,
                role.priority,
                role.created_at,
                role.updated_at,
            ),
        )
        return role

    async def update(self, role_id: str, patch: dict[str, Any]) -> Role | None:
        """Update the given columns, return the stored role."""
        fields = {k: v for k, v in patch.items() if k in _UPDATABLE}
        if fields:
            assignments = sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(k)) for k in fields
            )
            values = [Jsonb(v) if k in _JSON_FIELDS else v for k, v in fields.items()]
            await self._conn.execute(
                sql.SQL("UPDATE role SET {} WHERE id = %s").format(assignments),
                (*values, role_id),
            )
        return await self.get_by_id(role_id)

    async def delete(self, role_id: str) -> bool:
        """Delete role."""
        cur = await self._conn.execute(
            "DELETE FROM role WHERE id = %s",
            (role_id,),
        )
        return cur.rowcount > 0

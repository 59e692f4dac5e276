"""Seed default system roles and permissions."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from rolegate.application.ports import PermissionCache
from rolegate.domain.entities import (
    CURRENT_USER,
    Permission,
    PermissionCondition,
    PermissionResource,
    Role,
)
from rolegate.domain.services.ownership import DEFAULT_OWNER_FIELD
from rolegate.domain.value_objects import (
    ConditionOperator,
    PermissionScope,
    ResourceType,
    admin_permission_name,
    global_permission_name,
    schema_permission_name,
)

logger = logging.getLogger(__name__)

ALL_SCOPES = list(PermissionScope)
CRUD_SCOPES = [
    PermissionScope.CREATE,
    PermissionScope.READ,
    PermissionScope.UPDATE,
    PermissionScope.DELETE,
]
OWN_SCOPES = [PermissionScope.READ, PermissionScope.UPDATE, PermissionScope.DELETE]
ADMIN_RESOURCES = ["roles", "permissions", "users"]


@dataclass
class DefaultRole:
    name: str
    display_name: str
    description: str
    priority: int
    permission_names: list[str]
    inherits_from: list[str] = field(default_factory=list)


@dataclass
class SeedResult:
    """Counts of entities created by a seeding run."""

    permissions_created: int = 0
    roles_created: int = 0


def default_permissions(owner_field: str = DEFAULT_OWNER_FIELD) -> list[Permission]:
    """System permissions every installation starts with."""
    permissions: list[Permission] = []

    for scope in ALL_SCOPES:
        permissions.append(
            _permission(
                global_permission_name(scope),
                f"Global {scope.value.capitalize()}",
                f"Full {scope.value} access to all resources",
                scope,
                PermissionResource(type=ResourceType.GLOBAL),
            )
        )

    for resource in ADMIN_RESOURCES:
        for scope in CRUD_SCOPES:
            permissions.append(
                _permission(
                    admin_permission_name(resource, scope),
                    f"{scope.value.capitalize()} {resource.capitalize()}",
                    f"Permission to {scope.value} {resource}",
                    scope,
                    PermissionResource(type=ResourceType.SCHEMA, target=f"rbac:{resource}"),
                )
            )

    for scope in ALL_SCOPES:
        permissions.append(
            _permission(
                schema_permission_name("*", scope),
                f"{scope.value.capitalize()} Any Content",
                f"Permission to {scope.value} content in any schema",
                scope,
                PermissionResource(type=ResourceType.SCHEMA, target="*"),
            )
        )

    for scope in OWN_SCOPES:
        permissions.append(
            _permission(
                f"content:own:{scope.value}",
                f"{scope.value.capitalize()} Own Content",
                f"Permission to {scope.value} content created by the user",
                scope,
                PermissionResource(
                    type=ResourceType.RECORD,
                    target="*",
                    conditions=[
                        PermissionCondition(
                            field=owner_field,
                            operator=ConditionOperator.EQUALS,
                            value=CURRENT_USER,
                        )
                    ],
                ),
            )
        )

    return permissions


def default_roles() -> list[DefaultRole]:
    """System roles, highest authority first."""
    return [
        DefaultRole(
            name="super-admin",
            display_name="Super Admin",
            description="Full system access. Can manage all content, users, roles, and system settings.",
            priority=100,
            permission_names=[global_permission_name(s) for s in ALL_SCOPES],
        ),
        DefaultRole(
            name="admin",
            display_name="Admin",
            description="Administrative access. Can manage content, users, and roles.",
            priority=80,
            permission_names=[
                *(schema_permission_name("*", s) for s in ALL_SCOPES),
                "admin:roles:read",
                "admin:users:create",
                "admin:users:read",
                "admin:users:update",
            ],
        ),
        DefaultRole(
            name="editor",
            display_name="Editor",
            description="Can create, edit, and publish content. Cannot delete content or manage users.",
            priority=60,
            permission_names=[
                "content:*:create",
                "content:*:read",
                "content:*:update",
                "content:*:publish",
            ],
        ),
        DefaultRole(
            name="author",
            display_name="Author",
            description="Can create and manage their own content only.",
            priority=40,
            permission_names=[
                "content:*:create",
                "content:own:read",
                "content:own:update",
                "content:own:delete",
            ],
        ),
        DefaultRole(
            name="viewer",
            display_name="Viewer",
            description="Read-only access to content.",
            priority=20,
            permission_names=["content:*:read"],
        ),
    ]


def _permission(
    name: str,
    display_name: str,
    description: str,
    scope: PermissionScope,
    resource: PermissionResource,
) -> Permission:
    return Permission(
        id=str(uuid4()),
        name=name,
        display_name=display_name,
        description=description,
        scope=scope,
        resource=resource,
        is_system=True,
    )


class SeedDefaultsUseCase:
    """Create missing default permissions and roles, matched by name."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_cache: PermissionCache,
        owner_field: str = DEFAULT_OWNER_FIELD,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = permission_cache
        self._owner_field = owner_field

    async def execute(self) -> SeedResult:
        """Idempotent: existing names are left untouched."""
        result = SeedResult()
        now = datetime.now(UTC)

        async with self._uow_factory() as uow:
            existing = {p.name: p for p in await uow.permissions.list_all()}
            for permission in default_permissions(self._owner_field):
                if permission.name in existing:
                    continue
                permission.created_at = now
                permission.updated_at = now
                existing[permission.name] = await uow.permissions.create(permission)
                result.permissions_created += 1

            roles = {r.name: r for r in await uow.roles.list_all()}
            for definition in default_roles():
                if definition.name in roles:
                    continue
                role = Role(
                    id=str(uuid4()),
                    name=definition.name,
                    display_name=definition.display_name,
                    description=definition.description,
                    priority=definition.priority,
                    permissions=[
                        existing[n].id for n in definition.permission_names if n in existing
                    ],
                    inherits_from=[
                        roles[n].id for n in definition.inherits_from if n in roles
                    ],
                    is_system=True,
                    created_at=now,
                    updated_at=now,
                )
                roles[role.name] = await uow.roles.create(role)
                result.roles_created += 1

        if result.permissions_created or result.roles_created:
            self._cache.invalidate()
            logger.info(
                "Seeded %d default permissions and %d default roles",
                result.permissions_created,
                result.roles_created,
            )
        return result

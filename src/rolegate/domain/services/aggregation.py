"""Aggregate the permissions of a role closure into a ResolvedPermissions snapshot."""

from collections.abc import Iterable

from rolegate.domain.entities import (
    FieldPermission,
    Permission,
    RecordPermission,
    ResolvedPermissions,
    Role,
)
from rolegate.domain.value_objects import PermissionScope, ResourceType


def collect_permission_ids(roles: Iterable[Role]) -> set[str]:
    """Union of the permission ids referenced by roles."""
    ids: set[str] = set()
    for role in roles:
        ids.update(role.permissions)
    return ids


def aggregate_permissions(
    role_ids: Iterable[str],
    roles: Iterable[Role],
    permissions: Iterable[Permission],
) -> ResolvedPermissions:
    """Bucket permissions by resource level.

    ``role_ids`` is the resolved closure; ``roles`` the roles of that closure
    that exist; ``permissions`` the entities referenced by those roles.
    Permissions that are not referenced by any role are ignored.
    """
    roles = list(roles)
    wanted = collect_permission_ids(roles)
    resolved = ResolvedPermissions(
        role_ids=sorted(set(role_ids)),
        role_names=[r.name for r in roles],
    )

    seen: set[str] = set()
    for permission in permissions:
        if permission.id not in wanted or permission.id in seen:
            continue
        seen.add(permission.id)
        _apply(resolved, permission)

    return resolved


def _apply(resolved: ResolvedPermissions, permission: Permission) -> None:
    scope = permission.scope
    resource = permission.resource

    match resource.type:
        case ResourceType.GLOBAL:
            if scope not in resolved.global_scopes:
                resolved.global_scopes.append(scope)

        case ResourceType.SCHEMA:
            if not resource.target:
                return
            scopes = resolved.schemas.setdefault(resource.target, [])
            if scope not in scopes:
                scopes.append(scope)

        case ResourceType.FIELD:
            if not resource.target or not resource.fields:
                return
            target_fields = resolved.fields.setdefault(resource.target, {})
            for name in resource.fields:
                current = target_fields.get(name)
                if current is None:
                    readonly = scope == PermissionScope.READ
                else:
                    # update access always lifts read-only
                    readonly = current.readonly and scope != PermissionScope.UPDATE
                target_fields[name] = FieldPermission(visible=True, readonly=readonly)

        case ResourceType.RECORD:
            if not resource.target or not resource.conditions:
                return
            entries = resolved.records.setdefault(resource.target, [])
            for condition in resource.conditions:
                entries.append(RecordPermission(scope=scope, condition=condition))

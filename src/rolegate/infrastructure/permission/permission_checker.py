"""Permission checker implementation - decides over resolved permissions."""

import copy
from collections.abc import Iterable
from typing import Any

from rolegate.domain.entities import (
    FieldPermission,
    PermissionContext,
    RecordPermission,
    ResolvedPermissions,
)
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.services.conditions import evaluate_condition
from rolegate.domain.services.ownership import is_owner
from rolegate.domain.value_objects import PermissionScope, is_valid_permission_scope
from rolegate.infrastructure.permission.resolver import PermissionResolver


def _as_scope(scope: PermissionScope | str) -> PermissionScope:
    if isinstance(scope, PermissionScope):
        return scope
    if not is_valid_permission_scope(scope):
        raise ValidationError(f"Invalid permission scope: {scope}")
    return PermissionScope(scope)


def _matches_record(
    entries: Iterable[RecordPermission],
    scope: PermissionScope,
    record: dict[str, Any],
    current_user_id: str | None,
) -> bool:
    return any(
        entry.scope == scope
        and evaluate_condition(entry.condition, record, current_user_id)
        for entry in entries
    )


def check_resolved(
    resolved: ResolvedPermissions,
    scope: PermissionScope,
    resource: str,
    context: PermissionContext | None = None,
) -> bool:
    """Allow/deny for scope on resource against a resolved snapshot.

    Global scopes allow everything. A schema grant is narrowed by the
    target's record entries whenever a concrete record is supplied, even when
    none of those entries carry the requested scope.
    """
    if scope in resolved.global_scopes:
        return True

    record = context.record if context else None
    current_user_id = context.current_user_id if context else None
    record_entries = resolved.records.get(resource) or []

    if scope in resolved.schemas.get(resource, []):
        if record is None:
            return True
        if record_entries:
            return _matches_record(record_entries, scope, record, current_user_id)
        return True

    if record_entries and record is not None:
        return _matches_record(record_entries, scope, record, current_user_id)

    return False


class RoleGatePermissionChecker:
    """Checks role ids against resolved global, schema and record permissions."""

    def __init__(self, resolver: PermissionResolver) -> None:
        self._resolver = resolver

    async def resolve(self, role_ids: list[str]) -> ResolvedPermissions:
        """Resolved permissions for role_ids, copied out of the cache."""
        return copy.deepcopy(await self._resolver.resolve(role_ids))

    async def has_permission(
        self,
        role_ids: list[str],
        scope: PermissionScope | str,
        resource: str,
        context: PermissionContext | None = None,
    ) -> bool:
        """Check if role_ids grant scope on resource, optionally for context.record."""
        scope = _as_scope(scope)
        resolved = await self._resolver.resolve(role_ids)
        return check_resolved(resolved, scope, resource, context)

    async def has_schema_permission(
        self, role_ids: list[str], schema: str, scope: PermissionScope | str
    ) -> bool:
        """Schema-level check ignoring record context."""
        scope = _as_scope(scope)
        resolved = await self._resolver.resolve(role_ids)
        if scope in resolved.global_scopes:
            return True
        return scope in resolved.schemas.get(schema, [])

    async def has_any_permission(
        self,
        role_ids: list[str],
        scopes: Iterable[PermissionScope | str],
        resource: str,
        context: PermissionContext | None = None,
        owner_field: str | None = None,
    ) -> bool:
        """True if any scope is granted.

        With owner_field and a record in context, a granted scope only counts
        when the caller owns the record.
        """
        scopes = [_as_scope(s) for s in scopes]
        resolved = await self._resolver.resolve(role_ids)
        for scope in scopes:
            if not check_resolved(resolved, scope, resource, context):
                continue
            if owner_field and context and context.record is not None:
                if not context.current_user_id or not is_owner(
                    context.current_user_id, context.record, owner_field
                ):
                    continue
            return True
        return False

    async def get_field_permissions(
        self, role_ids: list[str], schema: str
    ) -> dict[str, FieldPermission]:
        """Field permissions for schema, empty when none are defined."""
        resolved = await self._resolver.resolve(role_ids)
        return dict(resolved.fields.get(schema, {}))

    def invalidate(self, role_ids: list[str] | None = None) -> None:
        """Invalidate cached resolutions."""
        self._resolver.invalidate(role_ids)

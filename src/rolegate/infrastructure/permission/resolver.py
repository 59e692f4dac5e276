"""Permission resolver - cache-backed role hierarchy expansion and aggregation."""

import asyncio
import logging
from collections.abc import Iterable

from rolegate.application.ports import PermissionCache, cache_key
from rolegate.application.ports.permission_cache import CacheKey
from rolegate.domain.entities import ResolvedPermissions
from rolegate.domain.services.aggregation import aggregate_permissions, collect_permission_ids
from rolegate.domain.services.hierarchy import resolve_role_closure

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Resolves role ids to ResolvedPermissions, memoized in a PermissionCache.

    Store errors propagate: a failed lookup aborts the caller instead of
    resolving to an empty permission set.

    Concurrent misses for the same role set share one lookup, but only within
    a cache generation: a resolve that starts after an invalidation never
    joins a lookup that started before it.
    """

    def __init__(self, unit_of_work_factory: type, cache: PermissionCache) -> None:
        self._uow_factory = unit_of_work_factory
        self._cache = cache
        self._in_flight: dict[tuple[int, CacheKey], asyncio.Task[ResolvedPermissions]] = {}

    async def resolve(self, role_ids: Iterable[str]) -> ResolvedPermissions:
        """Resolved permissions for role_ids, computed on cache miss."""
        role_ids = list(role_ids)
        key = cache_key(role_ids)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        flight = (self._cache.generation, key)
        task = self._in_flight.get(flight)
        if task is None:
            task = asyncio.ensure_future(self._compute(flight, role_ids))
            self._in_flight[flight] = task
            task.add_done_callback(lambda _t: self._in_flight.pop(flight, None))
        return await asyncio.shield(task)

    def invalidate(self, role_ids: Iterable[str] | None = None) -> None:
        """Drop cached entries (all of them when role_ids is None)."""
        self._cache.invalidate(list(role_ids) if role_ids is not None else None)
        self._in_flight.clear()

    async def _compute(
        self, flight: tuple[int, CacheKey], role_ids: list[str]
    ) -> ResolvedPermissions:
        generation, key = flight
        logger.debug("Permission cache miss for roles [%s]", ", ".join(sorted(key)))
        async with self._uow_factory() as uow:
            all_roles = await uow.roles.list_all()
            roles_by_id = {r.id: r for r in all_roles}
            closure = resolve_role_closure(role_ids, roles_by_id)
            roles = [roles_by_id[rid] for rid in sorted(closure) if rid in roles_by_id]
            permission_ids = collect_permission_ids(roles)
            permissions = (
                await uow.permissions.list_by_ids(sorted(permission_ids))
                if permission_ids
                else []
            )

        resolved = aggregate_permissions(closure, roles, permissions)
        if not self._cache.put(key, resolved, generation):
            logger.debug("Discarded permissions resolved before an invalidation")
        return resolved

"""Permission cache port - memoizes ResolvedPermissions per role-id set."""

from collections.abc import Iterable
from typing import Protocol

from rolegate.domain.entities import ResolvedPermissions

CacheKey = frozenset[str]


def cache_key(role_ids: Iterable[str]) -> CacheKey:
    """Order-independent key for a role-id set."""
    return frozenset(role_ids)


class PermissionCache(Protocol):
    """Port for the resolved-permissions cache.

    ``generation`` changes on every invalidation. A value computed under an
    older generation is discarded by ``put``.
    """

    @property
    def generation(self) -> int: ...

    def get(self, key: CacheKey) -> ResolvedPermissions | None: ...

    def put(self, key: CacheKey, value: ResolvedPermissions, generation: int) -> bool: ...

    def invalidate(self, role_ids: Iterable[str] | None = None) -> None: ...

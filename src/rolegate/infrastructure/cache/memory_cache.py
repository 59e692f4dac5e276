"""In-process TTL cache for resolved permissions."""

import logging
import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from rolegate.application.ports.permission_cache import CacheKey
from rolegate.domain.entities import ResolvedPermissions

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


@dataclass(frozen=True)
class _Entry:
    value: ResolvedPermissions
    timestamp: float


class InMemoryPermissionCache:
    """TTL cache keyed by role-id sets.

    Entries live until they expire or are invalidated; there is no size bound,
    so the number of distinct role-id sets bounds memory. Every invalidation
    bumps ``generation`` so results computed before it are never stored.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, _Entry] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def get(self, key: CacheKey) -> ResolvedPermissions | None:
        """Cached value if present and younger than the TTL."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.timestamp < self._ttl:
                return entry.value
            del self._entries[key]
            return None

    def put(self, key: CacheKey, value: ResolvedPermissions, generation: int) -> bool:
        """Store value unless an invalidation happened since ``generation``."""
        with self._lock:
            if generation != self._generation:
                return False
            self._entries[key] = _Entry(value=value, timestamp=self._clock())
            return True

    def invalidate(self, role_ids: Iterable[str] | None = None) -> None:
        """Drop everything, or every entry whose key mentions one of role_ids."""
        if role_ids is None:
            with self._lock:
                self._generation += 1
                self._entries.clear()
            logger.debug("Cleared entire permission cache")
            return

        targets = set(role_ids)
        with self._lock:
            self._generation += 1
            stale = [key for key in self._entries if not targets.isdisjoint(key)]
            for key in stale:
                del self._entries[key]
        logger.debug(
            "Invalidated %d cache entries for roles: %s",
            len(stale),
            ", ".join(sorted(targets)),
        )

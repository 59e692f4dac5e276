"""Lifespan middleware - opens the pool and seeds defaults on startup, closes on shutdown."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from rolegate.application.use_cases.rbac.seed_defaults import SeedDefaultsUseCase

logger = logging.getLogger(__name__)


class LifespanMiddleware:
    """Middleware tied to the ASGI lifespan events."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        seed_defaults: SeedDefaultsUseCase | None = None,
    ) -> None:
        self._pool = pool
        self._seed_defaults = seed_defaults

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool, then create any missing default roles and permissions."""
        await self._pool.open()
        if self._seed_defaults is None:
            return
        logger.info("Initializing RBAC defaults")
        try:
            await self._seed_defaults.execute()
        except Exception:
            # the service still starts; /v1/rbac/status reports whether roles exist
            logger.exception("Failed to seed RBAC defaults")

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        await self._pool.close()

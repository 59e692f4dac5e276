"""RBAC initialization status."""

import falcon
import falcon.asgi


class StatusResource:
    """GET /v1/rbac/status - public, tells a setup UI whether roles exist."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        async with self._uow_factory() as uow:
            initialized = await uow.roles.count() > 0
        resp.media = {
            "initialized": initialized,
            "message": (
                "RBAC system is initialized"
                if initialized
                else "RBAC system needs initialization"
            ),
        }
        resp.status = falcon.HTTP_200

"""Current user's resolved permissions."""

import falcon
import falcon.asgi


class MyPermissionsResource:
    """GET /v1/rbac/me/permissions - any authenticated user may read their own."""

    def __init__(self, permission_checker) -> None:
        self.permission_checker = permission_checker

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Resolved permissions for the caller's role ids."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Authentication required"}
            return

        resolved = await self.permission_checker.resolve(user.role_ids)
        resp.media = resolved.to_dict()
        resp.status = falcon.HTTP_200

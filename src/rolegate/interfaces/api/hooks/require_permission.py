"""Request guard - falcon ``before`` hook enforcing a permission on a responder."""

import logging
from collections.abc import Callable, Iterable

import falcon
import falcon.asgi

from rolegate.domain.entities import PermissionContext
from rolegate.domain.value_objects import PermissionScope

logger = logging.getLogger(__name__)

ResourceSelector = str | Callable[[falcon.asgi.Request, dict], str]


def require_permission(
    scopes: PermissionScope | str | Iterable[PermissionScope | str],
    resource: ResourceSelector | None = None,
    owner_field: str | None = None,
):
    """Build a hook that allows the request when the user holds any of scopes.

    ``resource`` is a static name or a callable of ``(req, params)``;
    it defaults to ``global``. With ``owner_field``, the record placed on
    ``req.context.record`` must also belong to the caller. The responder's
    resource must expose a ``permission_checker`` attribute. On success the
    resource name and the resolved permissions are attached to
    ``req.context.resource`` and ``req.context.permissions``.
    """
    if isinstance(scopes, str):
        scopes = [scopes]
    scopes = list(scopes)

    async def hook(
        req: falcon.asgi.Request, resp: falcon.asgi.Response, resource_obj, params: dict
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            raise falcon.HTTPUnauthorized(title="Unauthorized", description="Authentication required")
        if not user.role_ids:
            logger.warning("Permission check failed: user %s has no roles assigned", user.user_id)
            raise falcon.HTTPForbidden(title="Forbidden", description="No roles assigned")

        if callable(resource):
            target = resource(req, params)
        else:
            target = resource or "global"

        context = PermissionContext(
            record=getattr(req.context, "record", None),
            current_user_id=user.user_id,
        )
        checker = resource_obj.permission_checker
        allowed = await checker.has_any_permission(
            user.role_ids, scopes, target, context, owner_field=owner_field
        )
        if not allowed:
            wanted = " or ".join(str(s) for s in scopes)
            logger.warning(
                "Permission denied: user %s lacks %s on %s", user.user_id, wanted, target
            )
            raise falcon.HTTPForbidden(
                title="Forbidden",
                description=f"Insufficient permissions for {wanted} on {target}",
            )

        req.context.resource = target
        req.context.permissions = await checker.resolve(user.role_ids)

    return hook

"""Response filter - falcon ``after`` hook hiding fields the caller may not see."""

from collections.abc import Callable

import falcon.asgi

from rolegate.domain.services.field_visibility import filter_fields


def _guarded_resource(req: falcon.asgi.Request) -> str | None:
    return getattr(req.context, "resource", None)


def filter_response_fields(
    schema: str | Callable[[falcon.asgi.Request], str | None] = _guarded_resource,
):
    """Build a hook that filters ``resp.media`` by the caller's field permissions.

    By default the schema is the resource name resolved by the
    ``require_permission`` guard. When the caller has no field permissions
    for it the body is left untouched; otherwise it becomes
    ``{"data": ..., "_fieldPermissions": {...}}``.
    """

    async def hook(req: falcon.asgi.Request, resp: falcon.asgi.Response, resource_obj) -> None:
        user = getattr(req.context, "user", None)
        target = schema(req) if callable(schema) else schema
        if not user or not target or not user.role_ids or resp.media is None:
            return

        field_permissions = await resource_obj.permission_checker.get_field_permissions(
            user.role_ids, target
        )
        if not field_permissions:
            return

        resp.media = filter_fields(resp.media, field_permissions).to_dict()

    return hook

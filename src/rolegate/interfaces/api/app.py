"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from rolegate.interfaces.api.resources.health import HealthResource
from rolegate.interfaces.api.resources.me import MyPermissionsResource
from rolegate.interfaces.api.resources.permissions import (
    PermissionResource,
    PermissionsResource,
)
from rolegate.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)
from rolegate.interfaces.api.resources.status import StatusResource

logger = logging.getLogger(__name__)


async def handle_unexpected(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    """Log and answer 500 for errors no responder handled (store failures included)."""
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    roles_resource: RolesResource,
    role_resource: RoleResource,
    role_permissions_resource: RolePermissionsResource,
    permissions_resource: PermissionsResource,
    permission_resource: PermissionResource,
    my_permissions_resource: MyPermissionsResource,
    status_resource: StatusResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/rbac/status", status_resource)
    app.add_route("/v1/rbac/me/permissions", my_permissions_resource)
    app.add_route("/v1/rbac/roles", roles_resource)
    app.add_route("/v1/rbac/roles/{role_id}", role_resource)
    app.add_route("/v1/rbac/roles/{role_id}/permissions", role_permissions_resource)
    app.add_route("/v1/rbac/permissions", permissions_resource)
    app.add_route("/v1/rbac/permissions/{permission_id}", permission_resource)
    return app

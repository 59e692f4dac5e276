"""RBAC permission API resources."""

import falcon
import falcon.asgi

from rolegate.application.dto.permission_dto import (
    PermissionCreateInput,
    PermissionUpdateInput,
)
from rolegate.application.use_cases.permission.create_permission import (
    CreatePermissionUseCase,
)
from rolegate.application.use_cases.permission.delete_permission import (
    DeletePermissionUseCase,
)
from rolegate.application.use_cases.permission.update_permission import (
    UpdatePermissionUseCase,
)
from rolegate.domain.exceptions import RoleGateError
from rolegate.interfaces.api.hooks.require_permission import require_permission
from rolegate.interfaces.api.resources.errors import (
    read_json_body,
    set_domain_error,
    set_not_found,
)

PERMISSIONS = "rbac:permissions"


class PermissionsResource:
    """GET/POST /v1/rbac/permissions - list and create permissions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        create_permission: CreatePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self.permission_checker = permission_checker
        self._create = create_permission

    @falcon.before(require_permission("read", PERMISSIONS))
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List all permissions."""
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()
        resp.media = {"items": [p.to_dict() for p in permissions]}
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("create", PERMISSIONS))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a permission."""
        try:
            body = await read_json_body(req)
            permission = await self._create.execute(PermissionCreateInput.from_body(body))
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        resp.media = permission.to_dict()
        resp.status = falcon.HTTP_201


class PermissionResource:
    """GET/PUT/DELETE /v1/rbac/permissions/{permission_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        update_permission: UpdatePermissionUseCase,
        delete_permission: DeletePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self.permission_checker = permission_checker
        self._update = update_permission
        self._delete = delete_permission

    @falcon.before(require_permission("read", PERMISSIONS))
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        """Get permission by id."""
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id)
        if not permission:
            set_not_found(resp, "Permission")
            return
        resp.media = permission.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("update", PERMISSIONS))
    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        """Update permission."""
        try:
            body = await read_json_body(req)
            permission = await self._update.execute(
                permission_id, PermissionUpdateInput.from_body(body)
            )
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        if not permission:
            set_not_found(resp, "Permission")
            return
        resp.media = permission.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("delete", PERMISSIONS))
    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, permission_id: str
    ) -> None:
        """Delete permission."""
        try:
            deleted = await self._delete.execute(permission_id)
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        if not deleted:
            set_not_found(resp, "Permission")
            return
        resp.media = {"success": True}
        resp.status = falcon.HTTP_200

"""RBAC role API resources."""

import falcon
import falcon.asgi

from rolegate.application.dto.role_dto import RoleCreateInput, RoleUpdateInput
from rolegate.application.use_cases.role.assign_role_permissions import (
    AssignRolePermissionsUseCase,
)
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.revoke_role_permissions import (
    RevokeRolePermissionsUseCase,
)
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.domain.exceptions import RoleGateError, ValidationError
from rolegate.interfaces.api.hooks.require_permission import require_permission
from rolegate.interfaces.api.resources.errors import (
    read_json_body,
    set_domain_error,
    set_not_found,
)

ROLES = "rbac:roles"


def _permission_ids(body: dict) -> list[str]:
    ids = body.get("permissionIds")
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise ValidationError("permissionIds must be a list of strings")
    return ids


class RolesResource:
    """GET/POST /v1/rbac/roles - list and create roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self.permission_checker = permission_checker
        self._create = create_role

    @falcon.before(require_permission("read", ROLES))
    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List all roles."""
        async with self._uow_factory() as uow:
            roles = await uow.roles.list_all()
        resp.media = {"items": [r.to_dict() for r in roles]}
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("create", ROLES))
    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a role."""
        try:
            body = await read_json_body(req)
            role = await self._create.execute(RoleCreateInput.from_body(body))
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        resp.media = role.to_dict()
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PUT/DELETE /v1/rbac/roles/{role_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self.permission_checker = permission_checker
        self._update = update_role
        self._delete = delete_role

    @falcon.before(require_permission("read", ROLES))
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Get role by id."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
        if not role:
            set_not_found(resp, "Role")
            return
        resp.media = role.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("update", ROLES))
    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Update role."""
        try:
            body = await read_json_body(req)
            role = await self._update.execute(role_id, RoleUpdateInput.from_body(body))
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        if not role:
            set_not_found(resp, "Role")
            return
        resp.media = role.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("delete", ROLES))
    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Delete role."""
        try:
            deleted = await self._delete.execute(role_id)
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        if not deleted:
            set_not_found(resp, "Role")
            return
        resp.media = {"success": True}
        resp.status = falcon.HTTP_200


class RolePermissionsResource:
    """GET/POST/DELETE /v1/rbac/roles/{role_id}/permissions - list, assign, unassign."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        assign_permissions: AssignRolePermissionsUseCase,
        revoke_permissions: RevokeRolePermissionsUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self.permission_checker = permission_checker
        self._assign = assign_permissions
        self._revoke = revoke_permissions

    @falcon.before(require_permission("read", ROLES))
    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Permissions directly assigned to the role (not inherited)."""
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            permissions = (
                await uow.permissions.list_by_ids(role.permissions)
                if role and role.permissions
                else []
            )
        resp.media = {"items": [p.to_dict() for p in permissions]}
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("update", ROLES))
    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Assign permissions to role."""
        try:
            body = await read_json_body(req)
            role = await self._assign.execute(role_id, _permission_ids(body))
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        if not role:
            set_not_found(resp, "Role")
            return
        resp.media = role.to_dict()
        resp.status = falcon.HTTP_200

    @falcon.before(require_permission("update", ROLES))
    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Remove permissions from role."""
        try:
            body = await read_json_body(req)
            role = await self._revoke.execute(role_id, _permission_ids(body))
        except RoleGateError as e:
            set_domain_error(resp, e)
            return
        if not role:
            set_not_found(resp, "Role")
            return
        resp.media = role.to_dict()
        resp.status = falcon.HTTP_200

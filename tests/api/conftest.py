"""Fixtures for API tests."""

import pytest

from rolegate.application.use_cases.permission.create_permission import CreatePermissionUseCase
from rolegate.application.use_cases.permission.delete_permission import DeletePermissionUseCase
from rolegate.application.use_cases.permission.update_permission import UpdatePermissionUseCase
from rolegate.application.use_cases.role.assign_role_permissions import (
    AssignRolePermissionsUseCase,
)
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.revoke_role_permissions import (
    RevokeRolePermissionsUseCase,
)
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.interfaces.api.app import create_app
from rolegate.interfaces.api.middleware.auth import RequestUser
from rolegate.interfaces.api.resources.health import HealthResource
from rolegate.interfaces.api.resources.me import MyPermissionsResource
from rolegate.interfaces.api.resources.permissions import PermissionResource, PermissionsResource
from rolegate.interfaces.api.resources.roles import (
    RolePermissionsResource,
    RoleResource,
    RolesResource,
)
from rolegate.interfaces.api.resources.status import StatusResource

from tests.conftest import make_permission, make_role


class AuthBypassMiddleware:
    """Middleware that sets context.user from test headers.

    ``X-User-Id`` names the caller; ``X-Role-Ids`` is a comma-separated list.
    Without ``X-User-Id`` the request is anonymous.
    """

    async def process_request(self, req, resp):
        user_id = req.get_header("X-User-Id")
        if not user_id:
            req.context.user = None
            return
        roles = req.get_header("X-Role-Ids") or ""
        req.context.user = RequestUser(
            user_id=user_id, role_ids=[r for r in roles.split(",") if r]
        )


def as_user(role_ids: str, user_id: str = "u1") -> dict[str, str]:
    """Headers for an authenticated caller."""
    return {"X-User-Id": user_id, "X-Role-Ids": role_ids}


@pytest.fixture
def seeded_uow(fake_uow):
    """Store with an RBAC manager, a viewer and a system role."""
    admin_perms = [
        make_permission(f"admin-roles-{s}", s, "schema", "rbac:roles")
        for s in ("create", "read", "update", "delete")
    ] + [
        make_permission(f"admin-perms-{s}", s, "schema", "rbac:permissions")
        for s in ("create", "read", "update", "delete")
    ]
    fake_uow.seed(
        roles=[
            make_role("manager", [p.id for p in admin_perms]),
            make_role("viewer", ["content-read"]),
            make_role("sys", is_system=True, name="super-admin"),
        ],
        permissions=[
            *admin_perms,
            make_permission("content-read", "read", "schema", "*"),
            make_permission("sys-perm", "read", "global", is_system=True),
        ],
    )
    return fake_uow


@pytest.fixture
def app(seeded_uow, uow_factory, permission_cache, checker):
    """Falcon ASGI app wired with in-memory fakes."""
    update_role = UpdateRoleUseCase(uow_factory, permission_cache)
    return create_app(
        roles_resource=RolesResource(
            uow_factory, checker, CreateRoleUseCase(uow_factory, permission_cache)
        ),
        role_resource=RoleResource(
            uow_factory,
            checker,
            update_role,
            DeleteRoleUseCase(uow_factory, permission_cache),
        ),
        role_permissions_resource=RolePermissionsResource(
            uow_factory,
            checker,
            AssignRolePermissionsUseCase(uow_factory, update_role),
            RevokeRolePermissionsUseCase(uow_factory, update_role),
        ),
        permissions_resource=PermissionsResource(
            uow_factory, checker, CreatePermissionUseCase(uow_factory, permission_cache)
        ),
        permission_resource=PermissionResource(
            uow_factory,
            checker,
            UpdatePermissionUseCase(uow_factory, permission_cache),
            DeletePermissionUseCase(uow_factory, permission_cache),
        ),
        my_permissions_resource=MyPermissionsResource(checker),
        status_resource=StatusResource(uow_factory),
        health_resource=HealthResource(uow_factory),
        middleware=[AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)

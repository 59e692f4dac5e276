"""Application entry point and composition root."""

import falcon.asgi

from rolegate import __version__
from rolegate.application.use_cases.permission.create_permission import (
    CreatePermissionUseCase,
)
from rolegate.application.use_cases.permission.delete_permission import (
    DeletePermissionUseCase,
)
from rolegate.application.use_cases.permission.update_permission import (
    UpdatePermissionUseCase,
)
from rolegate.application.use_cases.rbac.seed_defaults import SeedDefaultsUseCase
from rolegate.application.use_cases.role.assign_role_permissions import (
    AssignRolePermissionsUseCase,
)
from rolegate.application.use_cases.role.create_role import CreateRoleUseCase
from rolegate.application.use_cases.role.delete_role import DeleteRoleUseCase
from rolegate.application.use_cases.role.revoke_role_permissions import (
    RevokeRolePermissionsUseCase,
)
from rolegate.application.use_cases.role.update_role import UpdateRoleUseCase
from rolegate.config import get_settings
from rolegate.infrastructure.auth.keycloak_provider import KeycloakProvider
from rolegate.infrastructure.cache.memory_cache import InMemoryPermissionCache
from rolegate.infrastructure.permission.permission_checker import RoleGatePermissionChecker
from rolegate.infrastructure.permission.resolver import PermissionResolver
from rolegate.infrastructure.persistence.postgres.connection import create_pool
from rolegate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from rolegate.interfaces.api.app import create_app
from rolegate.interfaces.api.middleware.auth import AuthMiddleware
from rolegate.interfaces.api.middleware.lifespan import LifespanMiddleware
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
from rolegate.logging_config import configure_logging


def main() -> None:
    """CLI entry point - serve the API."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level, settings.debug)
    print(f"rolegate v{__version__}")
    uvicorn.run(create_rolegate_app(), host="0.0.0.0", port=8000)


def create_rolegate_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.debug)
    pool = create_pool(settings.database_url)
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            roles_claim=settings.keycloak_roles_claim,
        )
        if settings.keycloak_client_secret
        else None
    )

    # one cache per process, shared by the resolver and every mutation
    permission_cache = InMemoryPermissionCache(ttl_seconds=settings.permission_cache_ttl_seconds)
    resolver = PermissionResolver(uow_factory, permission_cache)
    permission_checker = RoleGatePermissionChecker(resolver)

    create_role = CreateRoleUseCase(uow_factory, permission_cache)
    update_role = UpdateRoleUseCase(uow_factory, permission_cache)
    delete_role = DeleteRoleUseCase(uow_factory, permission_cache)
    assign_permissions = AssignRolePermissionsUseCase(uow_factory, update_role)
    revoke_permissions = RevokeRolePermissionsUseCase(uow_factory, update_role)
    create_permission = CreatePermissionUseCase(uow_factory, permission_cache)
    update_permission = UpdatePermissionUseCase(uow_factory, permission_cache)
    delete_permission = DeletePermissionUseCase(uow_factory, permission_cache)
    seed_defaults = (
        SeedDefaultsUseCase(uow_factory, permission_cache, owner_field=settings.owner_field)
        if settings.seed_defaults_on_startup
        else None
    )

    return create_app(
        roles_resource=RolesResource(uow_factory, permission_checker, create_role),
        role_resource=RoleResource(uow_factory, permission_checker, update_role, delete_role),
        role_permissions_resource=RolePermissionsResource(
            uow_factory, permission_checker, assign_permissions, revoke_permissions
        ),
        permissions_resource=PermissionsResource(
            uow_factory, permission_checker, create_permission
        ),
        permission_resource=PermissionResource(
            uow_factory, permission_checker, update_permission, delete_permission
        ),
        my_permissions_resource=MyPermissionsResource(permission_checker),
        status_resource=StatusResource(uow_factory),
        health_resource=HealthResource(uow_factory),
        middleware=[
            LifespanMiddleware(pool, seed_defaults),
            AuthMiddleware(keycloak),
        ],
    )

"""Pytest fixtures for rolegate tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Any

import pytest

from rolegate.domain.entities import (
    Permission,
    PermissionCondition,
    PermissionResource,
    Role,
)
from rolegate.domain.value_objects import ConditionOperator, PermissionScope, ResourceType
from rolegate.infrastructure.cache.memory_cache import InMemoryPermissionCache
from rolegate.infrastructure.permission.permission_checker import RoleGatePermissionChecker
from rolegate.infrastructure.permission.resolver import PermissionResolver


# --- Builders ---


def make_role(
    role_id: str,
    permissions: Iterable[str] = (),
    inherits_from: Iterable[str] = (),
    *,
    name: str | None = None,
    is_system: bool = False,
    priority: int = 0,
) -> Role:
    """Role with name defaulting to its id."""
    return Role(
        id=role_id,
        name=name or role_id,
        display_name=(name or role_id).title(),
        permissions=list(permissions),
        inherits_from=list(inherits_from),
        is_system=is_system,
        priority=priority,
    )


def make_permission(
    permission_id: str,
    scope: PermissionScope | str,
    resource_type: ResourceType | str,
    target: str | None = None,
    *,
    fields: list[str] | None = None,
    conditions: list[PermissionCondition] | None = None,
    name: str | None = None,
    is_system: bool = False,
) -> Permission:
    """Permission with name defaulting to its id."""
    return Permission(
        id=permission_id,
        name=name or permission_id,
        display_name=name or permission_id,
        scope=PermissionScope(scope),
        resource=PermissionResource(
            type=ResourceType(resource_type),
            target=target,
            fields=fields,
            conditions=conditions,
        ),
        is_system=is_system,
    )


def owner_condition(field: str = "createdBy") -> PermissionCondition:
    """``field equals $currentUser``."""
    return PermissionCondition(
        field=field, operator=ConditionOperator.EQUALS, value="$currentUser"
    )


# --- Fake repositories ---


class FakeRoleRepository:
    """In-memory role repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Role] = {}
        self.list_all_calls = 0

    async def get_by_id(self, role_id: str) -> Role | None:
        return self._by_id.get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for role in self._by_id.values():
            if role.name == name:
                return role
        return None

    async def list_all(self) -> list[Role]:
        self.list_all_calls += 1
        return list(self._by_id.values())

    async def count(self) -> int:
        return len(self._by_id)

    async def create(self, role: Role) -> Role:
        self._by_id[role.id] = role
        return role

    async def update(self, role_id: str, patch: dict[str, Any]) -> Role | None:
        role = self._by_id.get(role_id)
        if role is None:
            return None
        updated = replace(role, **patch)
        self._by_id[role_id] = updated
        return updated

    async def delete(self, role_id: str) -> bool:
        return self._by_id.pop(role_id, None) is not None

    def add_role(self, role: Role) -> None:
        """Helper to add role for tests."""
        self._by_id[role.id] = role


class FakePermissionRepository:
    """In-memory permission repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Permission] = {}
        self.list_by_ids_calls = 0

    async def get_by_id(self, permission_id: str) -> Permission | None:
        return self._by_id.get(permission_id)

    async def get_by_name(self, name: str) -> Permission | None:
        for permission in self._by_id.values():
            if permission.name == name:
                return permission
        return None

    async def list_all(self) -> list[Permission]:
        return list(self._by_id.values())

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        self.list_by_ids_calls += 1
        return [self._by_id[i] for i in permission_ids if i in self._by_id]

    async def create(self, permission: Permission) -> Permission:
        self._by_id[permission.id] = permission
        return permission

    async def update(self, permission_id: str, patch: dict[str, Any]) -> Permission | None:
        permission = self._by_id.get(permission_id)
        if permission is None:
            return None
        updated = replace(permission, **patch)
        self._by_id[permission_id] = updated
        return updated

    async def delete(self, permission_id: str) -> bool:
        return self._by_id.pop(permission_id, None) is not None

    def add_permission(self, permission: Permission) -> None:
        """Helper to add permission for tests."""
        self._by_id[permission.id] = permission


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.permissions = FakePermissionRepository()
        self.roles = FakeRoleRepository()
        self.commits = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass

    def seed(self, roles: Iterable[Role] = (), permissions: Iterable[Permission] = ()) -> None:
        """Add roles and permissions directly."""
        for role in roles:
            self.roles.add_role(role)
        for permission in permissions:
            self.permissions.add_permission(permission)


def shared_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW on every call, committing on success."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow
        await uow.commit()

    return _factory


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the test's FakeUnitOfWork."""
    return shared_factory(fake_uow)


@pytest.fixture
def permission_cache() -> InMemoryPermissionCache:
    return InMemoryPermissionCache(ttl_seconds=300)


@pytest.fixture
def resolver(uow_factory, permission_cache) -> PermissionResolver:
    return PermissionResolver(uow_factory, permission_cache)


@pytest.fixture
def checker(resolver) -> RoleGatePermissionChecker:
    return RoleGatePermissionChecker(resolver)

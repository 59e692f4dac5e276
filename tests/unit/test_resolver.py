"""Unit tests for PermissionResolver."""

import asyncio
from contextlib import asynccontextmanager

import pytest

from rolegate.domain.value_objects import PermissionScope
from rolegate.infrastructure.cache.memory_cache import InMemoryPermissionCache
from rolegate.infrastructure.permission.resolver import PermissionResolver

from tests.conftest import make_permission, make_role


@pytest.fixture
def seeded_uow(fake_uow):
    fake_uow.seed(
        roles=[
            make_role("editor", ["p-update"], inherits_from=["viewer"]),
            make_role("viewer", ["p-read"]),
        ],
        permissions=[
            make_permission("p-read", "read", "schema", "*"),
            make_permission("p-update", "update", "schema", "*"),
        ],
    )
    return fake_uow


@pytest.mark.asyncio
async def test_resolve_expands_hierarchy(seeded_uow, resolver) -> None:
    resolved = await resolver.resolve(["editor"])
    assert resolved.schemas == {"*": [PermissionScope.READ, PermissionScope.UPDATE]}
    assert resolved.role_ids == ["editor", "viewer"]


@pytest.mark.asyncio
async def test_second_resolve_hits_cache(seeded_uow, resolver) -> None:
    first = await resolver.resolve(["editor"])
    second = await resolver.resolve(["editor"])

    assert second == first
    assert seeded_uow.roles.list_all_calls == 1
    assert seeded_uow.permissions.list_by_ids_calls == 1


@pytest.mark.asyncio
async def test_role_order_shares_cache_entry(seeded_uow, resolver) -> None:
    await resolver.resolve(["viewer", "editor"])
    await resolver.resolve(["editor", "viewer"])
    assert seeded_uow.roles.list_all_calls == 1


@pytest.mark.asyncio
async def test_invalidate_forces_recompute(seeded_uow, resolver) -> None:
    await resolver.resolve(["viewer"])
    seeded_uow.roles.add_role(make_role("viewer", ["p-read", "p-update"]))

    stale = await resolver.resolve(["viewer"])
    assert stale.schemas["*"] == [PermissionScope.READ]

    resolver.invalidate(["viewer"])
    fresh = await resolver.resolve(["viewer"])
    assert fresh.schemas["*"] == [PermissionScope.READ, PermissionScope.UPDATE]
    assert seeded_uow.roles.list_all_calls == 2


@pytest.mark.asyncio
async def test_no_permissions_skips_permission_lookup(fake_uow, resolver) -> None:
    fake_uow.seed(roles=[make_role("empty")])
    resolved = await resolver.resolve(["empty"])
    assert resolved.global_scopes == []
    assert fake_uow.permissions.list_by_ids_calls == 0


@pytest.mark.asyncio
async def test_unknown_role_resolves_to_nothing(resolver) -> None:
    resolved = await resolver.resolve(["ghost"])
    assert resolved.schemas == {}
    assert resolved.role_ids == ["ghost"]
    assert resolved.role_names == []


@pytest.mark.asyncio
async def test_store_error_propagates_and_is_not_cached(fake_uow) -> None:
    """Lookup failures fail closed instead of caching an empty set."""
    cache = InMemoryPermissionCache()

    @asynccontextmanager
    async def broken_factory():
        raise ConnectionError("database unavailable")
        yield fake_uow

    resolver = PermissionResolver(broken_factory, cache)
    with pytest.raises(ConnectionError):
        await resolver.resolve(["viewer"])
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_concurrent_misses_share_one_lookup(seeded_uow, resolver) -> None:
    results = await asyncio.gather(*(resolver.resolve(["editor"]) for _ in range(5)))
    assert all(r is results[0] for r in results)
    assert seeded_uow.roles.list_all_calls == 1


@pytest.fixture
def held_lookup(seeded_uow, monkeypatch):
    """Pause the first role lookup after it has read the roles."""
    entered = asyncio.Event()
    release = asyncio.Event()
    list_all = seeded_uow.roles.list_all

    async def held_list_all():
        roles = await list_all()
        if seeded_uow.roles.list_all_calls == 1:
            entered.set()
            await release.wait()
        return roles

    monkeypatch.setattr(seeded_uow.roles, "list_all", held_list_all)
    return entered, release


@pytest.mark.asyncio
@pytest.mark.parametrize("via_resolver", [True, False])
async def test_resolve_after_invalidate_does_not_join_older_lookup(
    seeded_uow, resolver, permission_cache, held_lookup, via_resolver
) -> None:
    entered, release = held_lookup
    first = asyncio.ensure_future(resolver.resolve(["viewer"]))
    await entered.wait()

    await seeded_uow.roles.update("viewer", {"permissions": []})
    if via_resolver:
        resolver.invalidate(["viewer"])
    else:
        permission_cache.invalidate(["viewer"])

    after = await resolver.resolve(["viewer"])
    assert after.schemas == {}

    release.set()
    before = await first
    assert before.schemas == {"*": [PermissionScope.READ]}

    later = await resolver.resolve(["viewer"])
    assert later.schemas == {}
    assert seeded_uow.roles.list_all_calls == 2


@pytest.mark.asyncio
async def test_lookup_finishing_after_invalidate_is_not_cached(
    seeded_uow, resolver, permission_cache, held_lookup
) -> None:
    entered, release = held_lookup
    first = asyncio.ensure_future(resolver.resolve(["viewer"]))
    await entered.wait()

    await seeded_uow.roles.update("viewer", {"permissions": []})
    permission_cache.invalidate()
    release.set()
    await first

    assert len(permission_cache) == 0
    resolved = await resolver.resolve(["viewer"])
    assert resolved.schemas == {}

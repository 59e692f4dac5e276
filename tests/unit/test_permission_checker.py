"""Unit tests for permission decisions."""

import dataclasses

import pytest

from rolegate.domain.entities import FieldPermission, PermissionContext
from rolegate.domain.exceptions import ValidationError
from rolegate.domain.value_objects import PermissionScope

from tests.conftest import make_permission, make_role, owner_condition


@pytest.fixture
def seeded(fake_uow):
    fake_uow.seed(
        roles=[
            make_role("super", ["g-read", "g-update", "g-delete"]),
            make_role("editor", ["c-update"], inherits_from=["viewer"]),
            make_role("viewer", ["c-read"]),
            make_role("author", ["a-read", "own-update"]),
            make_role("narrow", ["a-read", "own-delete"]),
            make_role("fields", ["f-read", "f-update"]),
            make_role("post-editor", ["posts-update", "own-posts-update"]),
        ],
        permissions=[
            make_permission("g-read", "read", "global"),
            make_permission("g-update", "update", "global"),
            make_permission("g-delete", "delete", "global"),
            make_permission("c-read", "read", "schema", "*"),
            make_permission("c-update", "update", "schema", "*"),
            make_permission("a-read", "read", "schema", "articles"),
            make_permission(
                "own-update", "update", "record", "articles", conditions=[owner_condition()]
            ),
            make_permission(
                "own-delete", "delete", "record", "articles", conditions=[owner_condition()]
            ),
            make_permission("f-read", "read", "field", "articles", fields=["title", "secret"]),
            make_permission("f-update", "update", "field", "articles", fields=["title"]),
            make_permission("posts-update", "update", "schema", "posts"),
            make_permission(
                "own-posts-update", "update", "record", "posts", conditions=[owner_condition()]
            ),
        ],
    )
    return fake_uow


def _record(owner: str) -> PermissionContext:
    return PermissionContext(record={"id": "rec-1", "createdBy": owner}, current_user_id=owner)


@pytest.mark.asyncio
async def test_global_scope_allows_any_resource(seeded, checker) -> None:
    assert await checker.has_permission(["super"], "delete", "anything")
    assert await checker.has_permission(["super"], PermissionScope.READ, "articles", _record("x"))
    assert not await checker.has_permission(["super"], "publish", "anything")


@pytest.mark.asyncio
async def test_editor_inherits_viewer(seeded, checker) -> None:
    resolved = await checker.resolve(["editor"])
    assert resolved.to_dict()["schemas"] == {"*": ["read", "update"]}

    assert await checker.has_permission(["editor"], "update", "*")
    assert await checker.has_permission(["editor"], "read", "*")
    assert not await checker.has_permission(["editor"], "delete", "*")
    assert not await checker.has_permission(["viewer"], "update", "*")


@pytest.mark.asyncio
async def test_wildcard_is_not_expanded(seeded, checker) -> None:
    """``*`` is a literal target name."""
    assert not await checker.has_permission(["viewer"], "read", "articles")


@pytest.mark.asyncio
async def test_record_grant_without_schema_grant(seeded, checker) -> None:
    assert await checker.has_permission(
        ["author"], "update", "articles", PermissionContext(
            record={"createdBy": "u1"}, current_user_id="u1"
        )
    )
    assert not await checker.has_permission(
        ["author"], "update", "articles", PermissionContext(
            record={"createdBy": "u1"}, current_user_id="u2"
        )
    )


@pytest.mark.asyncio
async def test_record_grant_needs_record(seeded, checker) -> None:
    assert not await checker.has_permission(["author"], "update", "articles")


@pytest.mark.asyncio
async def test_schema_grant_narrowed_by_record_entries(seeded, checker) -> None:
    """Record entries for the target narrow a schema grant once a record is given."""
    assert await checker.has_permission(["narrow"], "read", "articles")
    assert not await checker.has_permission(["narrow"], "read", "articles", _record("u1"))


@pytest.mark.asyncio
async def test_schema_grant_allowed_through_matching_record_entry(seeded, checker) -> None:
    mine = PermissionContext(record={"createdBy": "u1"}, current_user_id="u1")
    theirs = PermissionContext(record={"createdBy": "u1"}, current_user_id="u2")

    assert await checker.has_permission(["post-editor"], "update", "posts", mine)
    assert not await checker.has_permission(["post-editor"], "update", "posts", theirs)
    assert await checker.has_permission(["post-editor"], "update", "posts")


@pytest.mark.asyncio
async def test_schema_grant_kept_without_record_entries(seeded, checker) -> None:
    assert await checker.has_permission(["viewer"], "read", "*", _record("u1"))


@pytest.mark.asyncio
async def test_invalid_scope_raises(seeded, checker) -> None:
    with pytest.raises(ValidationError):
        await checker.has_permission(["viewer"], "write", "*")


@pytest.mark.asyncio
async def test_no_roles_denies(seeded, checker) -> None:
    assert not await checker.has_permission([], "read", "*")


@pytest.mark.asyncio
async def test_has_schema_permission_ignores_records(seeded, checker) -> None:
    assert await checker.has_schema_permission(["super"], "articles", "delete")
    assert await checker.has_schema_permission(["author"], "articles", "read")
    assert not await checker.has_schema_permission(["author"], "articles", "update")


@pytest.mark.asyncio
async def test_has_any_permission(seeded, checker) -> None:
    assert await checker.has_any_permission(["viewer"], ["delete", "read"], "*")
    assert not await checker.has_any_permission(["viewer"], ["delete", "update"], "*")
    assert not await checker.has_any_permission(["viewer"], [], "*")


@pytest.mark.asyncio
async def test_has_any_permission_with_owner_field(seeded, checker) -> None:
    mine = PermissionContext(record={"createdBy": "u1"}, current_user_id="u1")
    theirs = PermissionContext(record={"createdBy": "u2"}, current_user_id="u1")

    assert await checker.has_any_permission(["viewer"], ["read"], "*", mine, owner_field="createdBy")
    assert not await checker.has_any_permission(
        ["viewer"], ["read"], "*", theirs, owner_field="createdBy"
    )
    # no record: ownership is not checked
    assert await checker.has_any_permission(
        ["viewer"], ["read"], "*", PermissionContext(current_user_id="u1"), owner_field="createdBy"
    )


@pytest.mark.asyncio
async def test_get_field_permissions(seeded, checker) -> None:
    field_permissions = await checker.get_field_permissions(["fields"], "articles")
    assert field_permissions == {
        "title": FieldPermission(visible=True, readonly=False),
        "secret": FieldPermission(visible=True, readonly=True),
    }
    assert await checker.get_field_permissions(["fields"], "other") == {}


@pytest.mark.asyncio
async def test_invalidate_clears_cache(seeded, checker, permission_cache) -> None:
    await checker.resolve(["viewer"])
    assert len(permission_cache) == 1
    checker.invalidate()
    assert len(permission_cache) == 0


@pytest.mark.asyncio
async def test_resolve_returns_copy_of_cached_snapshot(seeded, checker) -> None:
    resolved = await checker.resolve(["editor"])
    resolved.schemas["*"].append(PermissionScope.DELETE)
    resolved.global_scopes.append(PermissionScope.DELETE)

    assert not await checker.has_permission(["editor"], "delete", "*")
    assert (await checker.resolve(["editor"])).schemas == {
        "*": [PermissionScope.READ, PermissionScope.UPDATE]
    }


@pytest.mark.asyncio
async def test_field_permissions_cannot_be_mutated(seeded, checker) -> None:
    field_permissions = await checker.get_field_permissions(["fields"], "articles")
    with pytest.raises(dataclasses.FrozenInstanceError):
        field_permissions["secret"].readonly = False

    field_permissions["secret"] = FieldPermission(visible=False)
    again = await checker.get_field_permissions(["fields"], "articles")
    assert again["secret"] == FieldPermission(visible=True, readonly=True)

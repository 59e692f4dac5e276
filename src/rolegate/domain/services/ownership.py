"""Record ownership helpers.

Records are plain mappings; the owner id lives in a configurable field,
``createdBy`` by default.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from rolegate.domain.exceptions import NotOwner

DEFAULT_OWNER_FIELD = "createdBy"


def get_owner_id(record: Mapping[str, Any], owner_field: str = DEFAULT_OWNER_FIELD) -> str | None:
    """Owner id stored on record, None unless it is a string."""
    owner_id = record.get(owner_field)
    return owner_id if isinstance(owner_id, str) else None


def has_owner(record: Mapping[str, Any], owner_field: str = DEFAULT_OWNER_FIELD) -> bool:
    """Whether record carries a non-empty owner id."""
    return bool(get_owner_id(record, owner_field))


def is_owner(
    user_id: str, record: Mapping[str, Any], owner_field: str = DEFAULT_OWNER_FIELD
) -> bool:
    """Whether user_id owns record."""
    owner_id = get_owner_id(record, owner_field)
    if owner_id is None:
        return False
    return owner_id == user_id


def filter_by_ownership(
    user_id: str,
    records: Iterable[Mapping[str, Any]],
    owner_field: str = DEFAULT_OWNER_FIELD,
) -> list[Mapping[str, Any]]:
    """Records owned by user_id."""
    return [r for r in records if is_owner(user_id, r, owner_field)]


def assert_ownership(
    user_id: str, record: Mapping[str, Any], owner_field: str = DEFAULT_OWNER_FIELD
) -> None:
    """Raise NotOwner unless user_id owns record."""
    if not is_owner(user_id, record, owner_field):
        raise NotOwner("Access denied: you do not own this record")


def set_owner(
    user_id: str, record: Mapping[str, Any], owner_field: str = DEFAULT_OWNER_FIELD
) -> dict[str, Any]:
    """New record with the owner field set to user_id."""
    return {**record, owner_field: user_id}


def transfer_ownership(
    new_owner_id: str, record: Mapping[str, Any], owner_field: str = DEFAULT_OWNER_FIELD
) -> dict[str, Any]:
    """New record owned by new_owner_id."""
    return set_owner(new_owner_id, record, owner_field)

"""Field visibility filter for response payloads."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rolegate.domain.entities import FieldPermission


@dataclass
class FilteredPayload:
    """Filtered data plus the field permissions used, for read-only marking in the UI."""

    data: Any
    field_permissions: dict[str, FieldPermission] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "_fieldPermissions": {k: v.to_dict() for k, v in self.field_permissions.items()},
        }


def filter_record(
    record: Mapping[str, Any], field_permissions: Mapping[str, FieldPermission]
) -> dict[str, Any]:
    """Copy of record without the fields marked invisible."""
    result: dict[str, Any] = {}
    for key, value in record.items():
        permission = field_permissions.get(key)
        if permission is not None and not permission.visible:
            continue
        result[key] = value
    return result


def filter_fields(
    payload: Any, field_permissions: Mapping[str, FieldPermission]
) -> FilteredPayload:
    """Hide invisible fields in a single record or a list of records.

    Fields without an explicit permission are kept. Input is never mutated.
    """
    if isinstance(payload, list):
        data: Any = [
            filter_record(item, field_permissions) if isinstance(item, Mapping) else item
            for item in payload
        ]
    elif isinstance(payload, Mapping):
        data = filter_record(payload, field_permissions)
    else:
        data = payload
    return FilteredPayload(data=data, field_permissions=dict(field_permissions))

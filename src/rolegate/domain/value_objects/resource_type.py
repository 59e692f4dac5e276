"""Resource levels a permission applies to."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Granularity of a permission."""

    GLOBAL = "global"
    SCHEMA = "schema"
    FIELD = "field"
    RECORD = "record"


def is_valid_resource_type(value: object) -> bool:
    """Check whether value names a known resource level."""
    return isinstance(value, str) and value in ResourceType._value2member_map_

"""Domain exceptions."""


class RoleGateError(Exception):
    """Base exception for rolegate."""

    pass


class PermissionDenied(RoleGateError):
    """User does not have permission for the requested action."""

    pass


class NotOwner(PermissionDenied):
    """User does not own the record."""

    pass


class NotFound(RoleGateError):
    """Requested resource was not found."""

    pass


class ValidationError(RoleGateError):
    """Validation failed for input data."""

    pass


class SystemEntityImmutable(RoleGateError):
    """Attempt to rename or delete a system role or permission."""

    pass

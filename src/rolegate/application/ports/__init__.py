"""Application ports - interfaces for external adapters."""

from rolegate.application.ports.permission_cache import PermissionCache, cache_key
from rolegate.application.ports.permission_checker import PermissionChecker
from rolegate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionCache",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "cache_key",
]

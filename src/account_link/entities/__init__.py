"""Entities module with entity-centric structure.

Each entity has its own package containing its persistence model, its
repository and, where the rest of the code reads it, a domain model.
"""

from .account import AccountRepository, LocalAccount, LocalAccountTable
from .admin_registry import AdminGrantTable, AdminRegistryRepository

__all__ = [
    "LocalAccount",
    "LocalAccountTable",
    "AccountRepository",
    "AdminGrantTable",
    "AdminRegistryRepository",
]

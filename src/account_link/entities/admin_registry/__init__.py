"""Admin registry entity module.

- AdminGrantTable: Database persistence model
- AdminRegistryRepository: Admin registry backed by SQLModel
- parse_admin_list / format_admin_list: comma-separated list interchange
"""

from .admin_list import format_admin_list, parse_admin_list
from .repository import AdminRegistryRepository
from .table import AdminGrantTable

__all__ = [
    "AdminGrantTable",
    "AdminRegistryRepository",
    "format_admin_list",
    "parse_admin_list",
]

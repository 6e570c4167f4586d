"""Local account entity module.

- LocalAccount: Domain entity
- LocalAccountTable: Database persistence model
- AccountRepository: Account store backed by SQLModel
"""

from .entity import LocalAccount
from .repository import SOFT_FIELDS, AccountRepository
from .table import LocalAccountTable

__all__ = ["LocalAccount", "LocalAccountTable", "AccountRepository", "SOFT_FIELDS"]

"""Interfaces the login flow depends on.

Concrete implementations live in ``src.account_link.entities`` (SQL backed
stores) and ``src.account_link.core.services.session`` (session establishment).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AccountStore(ABC):
    """Narrow persistence contract for local accounts.

    Every operation touches a single row and is safe to retry, except
    ``insert_account`` which must not be retried blindly.
    """

    @abstractmethod
    def find_id_by_external_id(self, external_id: str) -> str | None:
        """Return the id of the account linked to ``external_id``, if any."""

    @abstractmethod
    def find_id_by_email(self, email: str) -> str | None:
        """Return the id of an unlinked account with this email, if any.

        Accounts already linked to an external id never match by email.
        """

    @abstractmethod
    def insert_account(self, fields: dict[str, Any]) -> str:
        """Insert a new account row and return its id.

        Raises:
            PersistenceError: On constraint violation or storage failure.
                ``is_duplicate`` is set when ``external_id`` already exists.
        """

    @abstractmethod
    def update_soft_fields(self, account_id: str, fields: dict[str, Any]) -> bool:
        """Overwrite mutable profile fields. Returns False if nothing was updated."""

    @abstractmethod
    def link_external_id(self, account_id: str, external_id: str) -> bool:
        """Set ``external_id`` on an unlinked account. Returns False if refused."""


class AdminRegistry(ABC):
    """Ordered set of account ids holding site administration rights."""

    @abstractmethod
    def add_if_absent(self, account_id: str) -> bool:
        """Atomically grant admin rights. Returns True when newly added."""

    @abstractmethod
    def contains(self, account_id: str) -> bool:
        """Return True if the account is a registered admin."""

    @abstractmethod
    def list_ids(self) -> list[str]:
        """Return admin account ids in grant order."""


class SessionEstablisher(ABC):
    """Hands a resolved account over to the host application's session layer."""

    @abstractmethod
    async def establish(self, account_id: str) -> str | None:
        """Start a session for ``account_id``.

        Returns:
            The session id, or None if the session could not be established.
        """

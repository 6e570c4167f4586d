from enum import StrEnum

from loguru import logger
from pydantic import BaseModel

from src.account_link.core.identity import SsoIdentity
from src.account_link.core.ports import AccountStore


class MatchedBy(StrEnum):
    EXTERNAL_ID = "external_id"
    EMAIL = "email"


class AccountMatch(BaseModel):
    """A local account found for an identity, and the key that found it."""

    account_id: str
    matched_by: MatchedBy

    @property
    def needs_link(self) -> bool:
        return self.matched_by is MatchedBy.EMAIL


class AccountResolver:
    """Locates the local account for an identity without writing anything."""

    def __init__(self, store: AccountStore) -> None:
        self._store = store

    def match(self, identity: SsoIdentity) -> AccountMatch | None:
        """Look up by external id first, then fall back to email.

        Raises:
            PersistenceError: If the store query fails. A failed lookup is
                never reported as "not found".
        """
        account_id = self._store.find_id_by_external_id(identity.external_id)
        if account_id is not None:
            logger.debug(f"Resolved {identity.external_id} by external id")
            return AccountMatch(account_id=account_id, matched_by=MatchedBy.EXTERNAL_ID)

        if identity.email:
            account_id = self._store.find_id_by_email(identity.email)
            if account_id is not None:
                logger.info(
                    f"Resolved {identity.external_id} by email fallback to account {account_id}"
                )
                return AccountMatch(account_id=account_id, matched_by=MatchedBy.EMAIL)

        return None

    def resolve(self, identity: SsoIdentity) -> str | None:
        match = self.match(identity)
        return match.account_id if match else None

from loguru import logger
from pydantic import BaseModel, Field

from src.account_link.core.errors import PersistenceError, SyncPartialFailure
from src.account_link.core.identity import AccountRole, SsoIdentity
from src.account_link.core.ports import AccountStore, AdminRegistry
from src.account_link.core.services.role_classifier import DEFAULT_ADMIN_ROLES, classify


class SyncResult(BaseModel):
    """Outcome of synchronizing one account with the identity it logged in as."""

    account_id: str
    soft_fields_updated: bool = False
    linked: bool = False
    role: AccountRole = AccountRole.USER
    admin_granted: bool = False
    failures: list[SyncPartialFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class ProfileSynchronizer:
    """Copies the identity's current profile onto the local account.

    Every write is best-effort: failures are collected on the result and
    logged, never raised, so stale metadata cannot block a login.
    """

    def __init__(
        self,
        store: AccountStore,
        admin_registry: AdminRegistry,
        admin_roles: tuple[str, ...] | list[str] = DEFAULT_ADMIN_ROLES,
    ) -> None:
        self._store = store
        self._admin_registry = admin_registry
        self._admin_roles = tuple(admin_roles)

    @staticmethod
    def soft_fields(identity: SsoIdentity) -> dict[str, str]:
        return {
            "email": identity.email,
            "given_name": identity.given_name,
            "family_name": identity.family_name,
            "username": identity.external_id,
        }

    def sync(
        self, account_id: str, identity: SsoIdentity, link: bool = False
    ) -> SyncResult:
        """Update soft fields, optionally link the external id, refresh admin rights.

        Args:
            account_id: Resolved local account; must not be None
            identity: Identity of the current login
            link: Set when the account was matched by email and still needs
                the external id written onto it
        """
        if account_id is None:
            raise ValueError("sync requires a resolved account id")

        result = SyncResult(account_id=account_id)

        result.soft_fields_updated = self._attempt(
            result,
            "update_soft_fields",
            lambda: self._store.update_soft_fields(account_id, self.soft_fields(identity)),
        )

        if link:
            result.linked = self._attempt(
                result,
                "link_external_id",
                lambda: self._store.link_external_id(account_id, identity.external_id),
            )

        result.role = classify(identity, self._admin_roles)
        if result.role is AccountRole.ADMIN:
            try:
                result.admin_granted = self._admin_registry.add_if_absent(account_id)
            except PersistenceError as e:
                self._record(result, "add_admin", str(e))

        return result

    def _attempt(self, result: SyncResult, operation: str, write) -> bool:
        try:
            succeeded = bool(write())
        except PersistenceError as e:
            self._record(result, operation, str(e))
            return False

        if not succeeded:
            self._record(result, operation, "store reported no change")
        return succeeded

    @staticmethod
    def _record(result: SyncResult, operation: str, detail: str) -> None:
        logger.warning(f"Sync of account {result.account_id}: {operation} failed ({detail})")
        result.failures.append(SyncPartialFailure(operation=operation, detail=detail))

from collections.abc import Callable
from typing import Any

from loguru import logger

from src.account_link.core.errors import AccessDeniedError, PersistenceError
from src.account_link.core.identity import AccountRole, SsoIdentity
from src.account_link.core.ports import AccountStore, AdminRegistry
from src.account_link.core.security import hash_placeholder_credential
from src.account_link.core.services.role_classifier import classify
from src.account_link.runtime.config.config_data import ProvisioningConfig
from src.account_link.runtime.context import get_config


class AccountProvisioner:
    """Creates a local account for an identity that resolved to nothing."""

    def __init__(
        self,
        store: AccountStore,
        admin_registry: AdminRegistry,
        config: ProvisioningConfig | None = None,
        credential_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._admin_registry = admin_registry
        self._config = config or get_config().provisioning
        self._credential_factory = credential_factory or (
            lambda: hash_placeholder_credential(
                self._config.credential_length, self._config.credential_suffix
            )
        )

    def may_provision(self, identity: SsoIdentity) -> bool:
        return identity.access_scope in self._config.allowed_access_scopes

    def build_account_fields(self, identity: SsoIdentity) -> dict[str, Any]:
        """Default column values for a new account.

        ``external_id`` is set here rather than linked afterwards so that an
        unlinked row never exists for two concurrent logins to match by email.
        """
        defaults = self._config.defaults
        return {
            "external_id": identity.external_id,
            "username": identity.external_id,
            "email": identity.email,
            "given_name": identity.given_name,
            "family_name": identity.family_name,
            "credential_hash": self._credential_factory(),
            "auth_method": defaults.auth_method,
            "is_suspended": False,
            "is_confirmed": defaults.is_confirmed,
            "force_password_change": defaults.force_password_change,
            "locale": defaults.locale,
            "timezone": defaults.timezone,
            "city": defaults.city,
            "country": defaults.country,
        }

    def provision(self, identity: SsoIdentity) -> str:
        """Create the account and register it as admin when its roles say so.

        Returns:
            The new account id

        Raises:
            AccessDeniedError: If the identity's access scope forbids creation.
            PersistenceError: If the insert fails; ``is_duplicate`` when another
                login created the same external id first. Not retried here.
        """
        if not self.may_provision(identity):
            logger.warning(
                f"Refusing to provision {identity.external_id}: "
                f"access scope '{identity.access_scope}' not allowed"
            )
            raise AccessDeniedError(identity.external_id, identity.access_scope)

        account_id = self._store.insert_account(self.build_account_fields(identity))
        logger.info(f"Provisioned local account {account_id} for {identity.external_id}")

        if classify(identity, self._config.admin_roles) is AccountRole.ADMIN:
            # Not transactional with the insert; the synchronizer re-adds on
            # every login if this write is lost.
            try:
                self._admin_registry.add_if_absent(account_id)
            except PersistenceError as e:
                logger.error(f"Could not register admin {account_id}: {e}")

        return account_id

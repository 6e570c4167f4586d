"""SSO login orchestration.

A login walks ``START -> RESOLVING -> FOUND | PROVISIONING -> SYNCING`` and
ends in ``ESTABLISHED`` or ``DENIED``. Only an access-scope refusal or a
persistence failure that cannot be recovered denies the login; profile sync
problems are reported on the result and the login carries on.
"""

from enum import StrEnum

from loguru import logger
from pydantic import BaseModel, Field
from sqlmodel import Session

from src.account_link.core.errors import (
    AccessDeniedError,
    LoginErrorCode,
    PersistenceError,
)
from src.account_link.core.identity import SsoIdentity
from src.account_link.core.ports import SessionEstablisher
from src.account_link.core.services.provisioner import AccountProvisioner
from src.account_link.core.services.resolver import AccountMatch, AccountResolver, MatchedBy
from src.account_link.core.services.synchronizer import ProfileSynchronizer, SyncResult
from src.account_link.entities.account.repository import AccountRepository
from src.account_link.entities.admin_registry.repository import AdminRegistryRepository
from src.account_link.runtime.config.config_data import ProvisioningConfig
from src.account_link.runtime.context import get_config


class LoginState(StrEnum):
    START = "start"
    RESOLVING = "resolving"
    FOUND = "found"
    PROVISIONING = "provisioning"
    SYNCING = "syncing"
    ESTABLISHED = "established"
    DENIED = "denied"


class LoginResult(BaseModel):
    """Outcome of one login attempt."""

    state: LoginState = LoginState.START
    trail: list[LoginState] = Field(default_factory=lambda: [LoginState.START])
    account_id: str | None = None
    created: bool = False
    session_id: str | None = None
    sync: SyncResult | None = None
    error: LoginErrorCode | None = None
    detail: str | None = None

    @property
    def established(self) -> bool:
        return self.state is LoginState.ESTABLISHED

    def move(self, state: LoginState) -> None:
        self.state = state
        self.trail.append(state)

    def deny(self, error: LoginErrorCode, detail: str) -> "LoginResult":
        self.error = error
        self.detail = detail
        self.move(LoginState.DENIED)
        return self


class LoginOrchestrator:
    """Sequences resolve, provision, sync and session establishment."""

    def __init__(
        self,
        resolver: AccountResolver,
        provisioner: AccountProvisioner,
        synchronizer: ProfileSynchronizer,
        session_establisher: SessionEstablisher,
    ) -> None:
        self._resolver = resolver
        self._provisioner = provisioner
        self._synchronizer = synchronizer
        self._session_establisher = session_establisher

    async def login(self, identity: SsoIdentity) -> LoginResult:
        result = LoginResult()
        logger.info(f"SSO login for {identity.external_id}")

        result.move(LoginState.RESOLVING)
        try:
            match = self._resolver.match(identity)
        except PersistenceError as e:
            logger.error(f"Account lookup failed for {identity.external_id}: {e}")
            return result.deny(LoginErrorCode.PERSISTENCE_ERROR, str(e))

        if match is None:
            result.move(LoginState.PROVISIONING)
            match = self._provision(identity, result)
            if match is None:
                return result

        result.account_id = match.account_id
        result.move(LoginState.FOUND)

        result.move(LoginState.SYNCING)
        result.sync = self._synchronizer.sync(
            match.account_id, identity, link=match.needs_link
        )

        session_id = await self._session_establisher.establish(match.account_id)
        if not session_id:
            return result.deny(
                LoginErrorCode.SESSION_FAILED,
                f"Session could not be established for account {match.account_id}",
            )

        result.session_id = session_id
        result.move(LoginState.ESTABLISHED)
        logger.info(f"Login established for account {match.account_id}")
        return result

    def _provision(self, identity: SsoIdentity, result: LoginResult) -> AccountMatch | None:
        """Create the account, recovering once from a lost insert race.

        Returns None after marking ``result`` denied.
        """
        try:
            account_id = self._provisioner.provision(identity)
        except AccessDeniedError as e:
            result.deny(LoginErrorCode.ACCESS_DENIED, str(e))
            return None
        except PersistenceError as e:
            if not e.is_duplicate:
                logger.error(f"Provisioning failed for {identity.external_id}: {e}")
                result.deny(LoginErrorCode.PERSISTENCE_ERROR, str(e))
                return None
            return self._recover_duplicate(identity, result, e)

        result.created = True
        return AccountMatch(account_id=account_id, matched_by=MatchedBy.EXTERNAL_ID)

    def _recover_duplicate(
        self, identity: SsoIdentity, result: LoginResult, error: PersistenceError
    ) -> AccountMatch | None:
        # A concurrent login inserted the same external id first; its row
        # should now resolve.
        logger.info(f"Duplicate insert for {identity.external_id}; resolving again")
        try:
            match = self._resolver.match(identity)
        except PersistenceError as e:
            result.deny(LoginErrorCode.PERSISTENCE_ERROR, str(e))
            return None

        if match is None:
            logger.error(f"Duplicate insert for {identity.external_id} but no account found")
            result.deny(LoginErrorCode.DUPLICATE_EXTERNAL_ID, str(error))
            return None
        return match


def create_login_orchestrator(
    db_session: Session,
    session_establisher: SessionEstablisher,
    config: ProvisioningConfig | None = None,
) -> LoginOrchestrator:
    """Wire the SQL-backed stores into a ready to use orchestrator."""
    config = config or get_config().provisioning
    store = AccountRepository(db_session)
    admin_registry = AdminRegistryRepository(db_session)
    return LoginOrchestrator(
        resolver=AccountResolver(store),
        provisioner=AccountProvisioner(store, admin_registry, config),
        synchronizer=ProfileSynchronizer(store, admin_registry, config.admin_roles),
        session_establisher=session_establisher,
    )

import secrets

from loguru import logger

from src.account_link.core.models.session import UserSession
from src.account_link.core.ports import SessionEstablisher
from src.account_link.core.storage.session_storage import SessionStorage
from src.account_link.runtime.config.config_data import SessionConfig
from src.account_link.runtime.context import get_config


class UserSessionService(SessionEstablisher):
    """Service for managing sessions of SSO-authenticated accounts."""

    def __init__(
        self, session_storage: SessionStorage, config: SessionConfig | None = None
    ) -> None:
        self._storage = session_storage
        self._config = config or get_config().session

    def _key(self, session_id: str) -> str:
        return f"{self._config.key_prefix}:{session_id}"

    async def create_user_session(self, account_id: str) -> str:
        """Store a new session for the account and return its id."""
        user_session = UserSession.create(
            session_id=secrets.token_urlsafe(32),
            account_id=account_id,
            session_max_age=self._config.max_age,
        )
        await self._storage.set(
            self._key(user_session.id), user_session, self._config.max_age
        )
        return user_session.id

    async def establish(self, account_id: str) -> str | None:
        try:
            session_id = await self.create_user_session(account_id)
        except RuntimeError as e:
            logger.error(f"Could not establish session for account {account_id}: {e}")
            return None

        logger.info(f"Established session for account {account_id}")
        return session_id

    async def get_user_session(self, session_id: str) -> UserSession | None:
        """Get a live session by id, refreshing its last access time."""
        user_session = await self._storage.get(self._key(session_id), UserSession)
        if not user_session:
            return None

        if user_session.is_expired():
            await self._storage.delete(self._key(session_id))
            return None

        user_session.update_access()
        await self._storage.set(
            self._key(user_session.id), user_session, self._config.max_age
        )
        return user_session

    async def delete_user_session(self, session_id: str) -> None:
        await self._storage.delete(self._key(session_id))

"""Schema creation and admin registry seeding."""

from loguru import logger
from sqlmodel import Session, SQLModel

from src.account_link.core.services.database.db_session import DbSessionService
from src.account_link.entities.account import LocalAccountTable  # noqa: F401
from src.account_link.entities.admin_registry import (  # noqa: F401
    AdminGrantTable,
    AdminRegistryRepository,
)
from src.account_link.runtime.context import get_config


class DbManageService:
    def __init__(self, db_session_service: DbSessionService | None = None):
        self._db = db_session_service or DbSessionService()

    def create_all(self) -> None:
        """Create all database tables."""
        SQLModel.metadata.create_all(self._db.engine)
        logger.info("Database initialized with tables.")

    def seed_admins(self, admin_list: str | None = None) -> list[str]:
        """Load the configured comma-separated admin list into the registry."""
        if admin_list is None:
            admin_list = get_config().provisioning.site_admins
        with Session(self._db.engine) as session:
            return AdminRegistryRepository(session).seed(admin_list)

"""Admin registry data-access layer."""

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from src.account_link.core.errors import PersistenceError
from src.account_link.core.ports import AdminRegistry
from src.account_link.entities.admin_registry.admin_list import (
    format_admin_list,
    parse_admin_list,
)
from src.account_link.entities.admin_registry.table import AdminGrantTable


class AdminRegistryRepository(AdminRegistry):
    """SQLModel implementation of the site-wide admin registry.

    Grants are only ever added. Removing an admin is left to the host
    application.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def add_if_absent(self, account_id: str) -> bool:
        if self.contains(account_id):
            return False

        try:
            self._session.add(AdminGrantTable(account_id=account_id))
            self._session.commit()
        except IntegrityError:
            # Granted concurrently by another login
            self._session.rollback()
            return False
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError("add_admin", str(e)) from e

        logger.info(f"Granted site admin to account {account_id}")
        return True

    def contains(self, account_id: str) -> bool:
        statement = select(AdminGrantTable.id).where(
            AdminGrantTable.account_id == account_id
        )
        try:
            return self._session.exec(statement).first() is not None
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError("contains_admin", str(e)) from e

    def list_ids(self) -> list[str]:
        statement = select(AdminGrantTable.account_id).order_by(AdminGrantTable.id)
        try:
            return list(self._session.exec(statement).all())
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError("list_admins", str(e)) from e

    def seed(self, admin_list: str) -> list[str]:
        """Import a comma-separated admin list, returning the ids newly added."""
        added = [
            account_id
            for account_id in parse_admin_list(admin_list)
            if self.add_if_absent(account_id)
        ]
        if added:
            logger.info(f"Seeded {len(added)} site admin(s) into the registry")
        return added

    def as_csv(self) -> str:
        return format_admin_list(self.list_ids())

"""Local account data-access layer."""

from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from src.account_link.core.errors import PersistenceError
from src.account_link.core.ports import AccountStore
from src.account_link.entities._base import utc_now
from src.account_link.entities.account.entity import LocalAccount
from src.account_link.entities.account.table import (
    EXTERNAL_ID_CONSTRAINT,
    LocalAccountTable,
)

SOFT_FIELDS = frozenset({"username", "email", "given_name", "family_name"})


def is_external_id_conflict(error: IntegrityError) -> bool:
    """True when ``error`` violates the unique external id, not another constraint.

    PostgreSQL names the constraint; SQLite names the column instead.
    """
    message = str(error.orig)
    return (
        EXTERNAL_ID_CONSTRAINT in message
        or f"{LocalAccountTable.__tablename__}.external_id" in message
    )


class AccountRepository(AccountStore):
    """SQLModel implementation of the account store.

    Each write runs in its own transaction: it is committed on success and
    rolled back on failure, so a failed insert never leaves a partial row.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, account_id: str) -> LocalAccount | None:
        row = self._session.get(LocalAccountTable, account_id)
        if row is None:
            return None
        return LocalAccount.model_validate(row, from_attributes=True)

    def find_id_by_external_id(self, external_id: str) -> str | None:
        statement = select(LocalAccountTable.id).where(
            LocalAccountTable.external_id == external_id
        )
        return self._first("find_id_by_external_id", statement)

    def find_id_by_email(self, email: str) -> str | None:
        statement = (
            select(LocalAccountTable.id)
            .where(LocalAccountTable.email == email)
            .where(LocalAccountTable.external_id.is_(None))
            .order_by(LocalAccountTable.created_at)
        )
        return self._first("find_id_by_email", statement)

    def insert_account(self, fields: dict[str, Any]) -> str:
        row = LocalAccountTable(**fields)
        try:
            self._session.add(row)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise PersistenceError(
                "insert_account", str(e.orig), is_duplicate=is_external_id_conflict(e)
            ) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError("insert_account", str(e)) from e

        logger.debug(f"Inserted local account {row.id}")
        return row.id

    def update_soft_fields(self, account_id: str, fields: dict[str, Any]) -> bool:
        unknown = set(fields) - SOFT_FIELDS
        if unknown:
            raise ValueError(f"Not soft fields: {sorted(unknown)}")

        row = self._session.get(LocalAccountTable, account_id)
        if row is None:
            return False

        for name, value in fields.items():
            setattr(row, name, value)
        row.updated_at = utc_now()
        self._commit("update_soft_fields", row)
        return True

    def link_external_id(self, account_id: str, external_id: str) -> bool:
        row = self._session.get(LocalAccountTable, account_id)
        if row is None:
            return False
        if row.external_id == external_id:
            return True
        if row.external_id is not None:
            logger.warning(
                f"Account {account_id} is already linked to another external id"
            )
            return False

        row.external_id = external_id
        row.updated_at = utc_now()
        self._commit("link_external_id", row)
        return True

    def _first(self, operation: str, statement) -> str | None:
        try:
            return self._session.exec(statement.limit(1)).first()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError(operation, str(e)) from e

    def _commit(self, operation: str, row: LocalAccountTable) -> None:
        try:
            self._session.add(row)
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise PersistenceError(
                operation, str(e.orig), is_duplicate=is_external_id_conflict(e)
            ) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise PersistenceError(operation, str(e)) from e

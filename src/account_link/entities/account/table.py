"""Local account database table model."""

from sqlalchemy import Column, String, UniqueConstraint
from sqlmodel import Field

from src.account_link.entities._base import EntityTable

EXTERNAL_ID_CONSTRAINT = "uq_local_account_external_id"


class LocalAccountTable(EntityTable, table=True):
    """Database persistence model for local accounts.

    The unique constraint on ``external_id`` is what stops two concurrent
    first logins for the same identity from both creating a row. NULLs do not
    collide, so any number of accounts may still be unlinked.
    """

    __tablename__ = "local_account"
    __table_args__ = (
        UniqueConstraint("external_id", name=EXTERNAL_ID_CONSTRAINT),
    )

    external_id: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True, index=True)
    )
    username: str = Field(sa_column=Column(String(255), nullable=False))
    email: str | None = Field(
        default=None, sa_column=Column(String(320), nullable=True, index=True)
    )
    given_name: str = ""
    family_name: str = ""

    credential_hash: str
    auth_method: str = "manual"
    is_suspended: bool = False
    is_confirmed: bool = True
    force_password_change: bool = False

    locale: str = "en"
    timezone: str = "99"
    city: str | None = None
    country: str | None = None

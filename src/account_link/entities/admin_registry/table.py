"""Admin registry database table model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.account_link.entities._base import utc_now


class AdminGrantTable(SQLModel, table=True):
    """One row per account holding site administration rights.

    The autoincrement ``id`` records grant order; the unique constraint on
    ``account_id`` makes inserting a grant an atomic add-if-absent.
    """

    __tablename__ = "admin_grant"
    __table_args__ = (
        UniqueConstraint("account_id", name="uq_admin_grant_account"),
    )

    id: int | None = Field(default=None, primary_key=True)
    account_id: str = Field(sa_column=Column(String(255), nullable=False))
    granted_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

"""Database initialization script."""

from src.account_link.core.services.database.db_manage import DbManageService
from src.account_link.runtime.logging_setup import configure_logging


def init_db() -> None:
    """Create all database tables and seed configured site admins."""
    db_manage_service = DbManageService()
    db_manage_service.create_all()
    db_manage_service.seed_admins()


if __name__ == "__main__":
    configure_logging()
    init_db()

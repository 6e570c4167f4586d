"""Schema creation and admin seeding against a file-backed SQLite database."""

from pathlib import Path

import pytest
from sqlmodel import Session

from src.account_link.core.services.database.db_manage import DbManageService
from src.account_link.core.services.database.db_session import DbSessionService
from src.account_link.entities.admin_registry import AdminRegistryRepository
from src.account_link.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    ProvisioningConfig,
)
from src.account_link.runtime.context import with_context


@pytest.fixture
def db_session_service(tmp_path: Path):
    config = ConfigData(database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'accounts.db'}"))
    service = DbSessionService(config)
    yield service
    service.engine.dispose()


class TestDbManageService:
    def test_create_all_and_seed(self, db_session_service):
        manager = DbManageService(db_session_service)
        manager.create_all()

        assert manager.seed_admins("2,5,2") == ["2", "5"]
        assert manager.seed_admins("5,9") == ["9"]

        with Session(db_session_service.engine) as session:
            assert AdminRegistryRepository(session).as_csv() == "2,5,9"

    def test_seed_defaults_to_configured_admins(self, db_session_service):
        manager = DbManageService(db_session_service)
        manager.create_all()

        override = ConfigData(provisioning=ProvisioningConfig(site_admins="7, 8"))
        with with_context(override):
            assert manager.seed_admins() == ["7", "8"]

    def test_create_all_is_idempotent(self, db_session_service):
        manager = DbManageService(db_session_service)

        manager.create_all()
        manager.create_all()

        assert manager.seed_admins("") == []


class TestDbSessionService:
    def test_health_check(self, db_session_service):
        assert db_session_service.health_check() is True

    def test_session_scope_commits(self, db_session_service):
        DbManageService(db_session_service).create_all()

        with db_session_service.session_scope() as session:
            AdminRegistryRepository(session).add_if_absent("acc-1")

        with db_session_service.session_scope() as session:
            assert AdminRegistryRepository(session).list_ids() == ["acc-1"]

    def test_session_scope_rolls_back_and_reraises(self, db_session_service):
        with pytest.raises(RuntimeError, match="boom"):
            with db_session_service.session_scope():
                raise RuntimeError("boom")

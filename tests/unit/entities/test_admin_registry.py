"""Unit tests for the admin registry entity package."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from src.account_link.core.errors import PersistenceError
from src.account_link.entities.admin_registry import (
    AdminRegistryRepository,
    format_admin_list,
    parse_admin_list,
)


class TestAdminList:
    """Test comma-separated list conversion."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            (None, []),
            ("", []),
            ("2", ["2"]),
            ("2,5,7", ["2", "5", "7"]),
            (" 2 , 5 ,, 7 ", ["2", "5", "7"]),
            ("2,5,2", ["2", "5"]),
            ("0,3", ["3"]),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_admin_list(text) == expected

    def test_format_keeps_order_and_drops_duplicates(self):
        assert format_admin_list(["b", "a", "b"]) == "b,a"
        assert format_admin_list([]) == ""


class TestAdminRegistryRepository:
    """Test the registry against SQLite."""

    def test_add_if_absent(self, admin_registry: AdminRegistryRepository):
        assert admin_registry.add_if_absent("acc-1") is True
        assert admin_registry.add_if_absent("acc-1") is False
        assert admin_registry.list_ids() == ["acc-1"]

    def test_preserves_grant_order(self, admin_registry):
        for account_id in ["acc-3", "acc-1", "acc-2"]:
            admin_registry.add_if_absent(account_id)

        assert admin_registry.list_ids() == ["acc-3", "acc-1", "acc-2"]
        assert admin_registry.as_csv() == "acc-3,acc-1,acc-2"

    def test_contains(self, admin_registry):
        admin_registry.add_if_absent("acc-1")

        assert admin_registry.contains("acc-1")
        assert not admin_registry.contains("acc-2")

    def test_seed_merges_with_existing(self, admin_registry):
        admin_registry.add_if_absent("5")

        added = admin_registry.seed("2,5,9")

        assert added == ["2", "9"]
        assert admin_registry.list_ids() == ["5", "2", "9"]

    def test_concurrent_grant_is_not_an_error(self, engine):
        """A second session granting the same account loses quietly."""
        with Session(engine) as first, Session(engine) as second:
            first_registry = AdminRegistryRepository(first)
            second_registry = AdminRegistryRepository(second)

            assert first_registry.add_if_absent("acc-1")
            assert second_registry.add_if_absent("acc-1") is False
            assert second_registry.list_ids() == ["acc-1"]


class TestAdminRegistryStoreFailures:
    """Store errors surface as PersistenceError, never as an empty registry."""

    @pytest.fixture
    def broken_session(self):
        session = Mock(spec=Session)
        session.exec.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        return session

    def test_list_ids_failure(self, broken_session):
        with pytest.raises(PersistenceError) as exc_info:
            AdminRegistryRepository(broken_session).list_ids()

        assert exc_info.value.operation == "list_admins"
        broken_session.rollback.assert_called_once()

    def test_contains_failure(self, broken_session):
        with pytest.raises(PersistenceError) as exc_info:
            AdminRegistryRepository(broken_session).contains("acc-1")

        assert exc_info.value.operation == "contains_admin"

"""Unit tests for ProfileSynchronizer."""

from unittest.mock import Mock

import pytest

from src.account_link.core.errors import PersistenceError
from src.account_link.core.identity import AccountRole
from src.account_link.core.ports import AccountStore, AdminRegistry
from src.account_link.core.services.synchronizer import ProfileSynchronizer


@pytest.fixture
def existing_account_id(account_repo, fake_credential_hash) -> str:
    return account_repo.insert_account(
        {
            "username": "legacy-user",
            "email": "u@y.com",
            "given_name": "Old",
            "family_name": "Name",
            "credential_hash": fake_credential_hash,
            "is_confirmed": True,
        }
    )


class TestSync:
    """Test synchronization against a real in-memory store."""

    def test_overwrites_soft_fields(self, synchronizer, account_repo, existing_account_id, identity):
        result = synchronizer.sync(existing_account_id, identity)

        account = account_repo.get(existing_account_id)
        assert result.ok
        assert result.soft_fields_updated
        assert account is not None
        assert account.given_name == "Una"
        assert account.family_name == "Young"
        assert account.username == "ext-1"

    def test_does_not_link_unless_asked(self, synchronizer, account_repo, existing_account_id, identity):
        synchronizer.sync(existing_account_id, identity)

        account = account_repo.get(existing_account_id)
        assert account is not None
        assert account.external_id is None

    def test_links_external_id_after_email_match(
        self, synchronizer, account_repo, existing_account_id, identity
    ):
        result = synchronizer.sync(existing_account_id, identity, link=True)

        assert result.linked
        assert account_repo.find_id_by_external_id("ext-1") == existing_account_id

    def test_creation_only_fields_untouched(
        self, synchronizer, account_repo, existing_account_id, make_identity, fake_credential_hash
    ):
        synchronizer.sync(existing_account_id, make_identity(given_name="First"))
        synchronizer.sync(existing_account_id, make_identity(given_name="Second"))

        account = account_repo.get(existing_account_id)
        assert account is not None
        assert account.given_name == "Second"
        assert account.credential_hash == fake_credential_hash
        assert account.is_confirmed is True

    def test_refuses_to_relink_to_other_external_id(
        self, synchronizer, account_repo, existing_account_id, make_identity
    ):
        synchronizer.sync(existing_account_id, make_identity(external_id="ext-1"), link=True)

        result = synchronizer.sync(
            existing_account_id, make_identity(external_id="ext-2"), link=True
        )

        assert not result.ok
        assert [f.operation for f in result.failures] == ["link_external_id"]
        assert account_repo.get(existing_account_id).external_id == "ext-1"

    def test_admin_is_added_to_registry(
        self, synchronizer, admin_registry, existing_account_id, make_identity
    ):
        result = synchronizer.sync(existing_account_id, make_identity(is_owning_app_admin=True))

        assert result.role is AccountRole.ADMIN
        assert result.admin_granted
        assert admin_registry.contains(existing_account_id)

    def test_admin_registry_is_never_demoted(
        self, synchronizer, admin_registry, existing_account_id, make_identity
    ):
        synchronizer.sync(existing_account_id, make_identity(is_owning_app_admin=True))

        result = synchronizer.sync(existing_account_id, make_identity())

        assert result.role is AccountRole.USER
        assert admin_registry.contains(existing_account_id)

    def test_unknown_account_is_reported(self, synchronizer, identity):
        result = synchronizer.sync("missing-account", identity)

        assert not result.ok
        assert not result.soft_fields_updated

    def test_none_account_id_is_a_programming_error(self, synchronizer, identity):
        with pytest.raises(ValueError):
            synchronizer.sync(None, identity)  # type: ignore[arg-type]


class TestSyncFailures:
    """Test that write failures degrade instead of raising."""

    @pytest.fixture
    def store(self):
        return Mock(spec=AccountStore)

    @pytest.fixture
    def registry(self):
        registry = Mock(spec=AdminRegistry)
        registry.add_if_absent.return_value = True
        return registry

    def test_soft_field_failure_is_recorded(self, store, registry, identity):
        store.update_soft_fields.side_effect = PersistenceError(
            "update_soft_fields", "database is locked"
        )

        result = ProfileSynchronizer(store, registry).sync("acc-1", identity)

        assert not result.ok
        assert result.failures[0].operation == "update_soft_fields"
        assert "database is locked" in result.failures[0].detail

    def test_link_still_attempted_after_soft_field_failure(self, store, registry, identity):
        store.update_soft_fields.return_value = False
        store.link_external_id.return_value = True

        result = ProfileSynchronizer(store, registry).sync("acc-1", identity, link=True)

        store.link_external_id.assert_called_once_with("acc-1", "ext-1")
        assert result.linked
        assert len(result.failures) == 1

    def test_registry_failure_is_recorded(self, store, registry, make_identity):
        store.update_soft_fields.return_value = True
        registry.add_if_absent.side_effect = PersistenceError("add_admin", "timeout")

        result = ProfileSynchronizer(store, registry).sync(
            "acc-1", make_identity(is_owning_app_admin=True)
        )

        assert [f.operation for f in result.failures] == ["add_admin"]

    def test_user_role_never_touches_registry(self, store, registry, identity):
        store.update_soft_fields.return_value = True

        ProfileSynchronizer(store, registry).sync("acc-1", identity)

        registry.add_if_absent.assert_not_called()

"""Unit tests for admin role classification."""

import pytest

from src.account_link.core.identity import AccountRole
from src.account_link.core.services.role_classifier import classify, is_admin


class TestClassify:
    """Test classify() against organization orderings."""

    def test_no_organizations_is_user(self, make_identity):
        assert classify(make_identity()) is AccountRole.USER

    def test_owning_app_admin_is_admin(self, make_identity):
        identity = make_identity(is_owning_app_admin=True)
        assert classify(identity) is AccountRole.ADMIN

    def test_owning_app_admin_ignores_organizations(self, make_identity):
        """App owners are admins even when their last organization says Member."""
        identity = make_identity(
            is_owning_app_admin=True,
            organizations=[{"organization_id": "1", "role": "Member"}],
        )
        assert classify(identity) is AccountRole.ADMIN

    def test_last_organization_admin_wins(self, make_identity):
        identity = make_identity(
            organizations=[
                {"organization_id": "1", "role": "Member"},
                {"organization_id": "2", "role": "Admin"},
            ]
        )
        assert classify(identity) is AccountRole.ADMIN

    def test_later_member_overrides_earlier_admin(self, make_identity):
        """Only the last organization counts; an earlier Admin role is discarded.

        This fails if classification is changed to "any admin membership wins".
        """
        identity = make_identity(
            organizations=[
                {"organization_id": "1", "role": "Admin"},
                {"organization_id": "2", "role": "Member"},
            ]
        )
        assert classify(identity) is AccountRole.USER
        assert not is_admin(identity)

    @pytest.mark.parametrize("role", ["Admin", "Super Admin", "SuperAdmin"])
    def test_admin_role_names(self, make_identity, role):
        identity = make_identity(organizations=[{"organization_id": "1", "role": role}])
        assert is_admin(identity)

    def test_role_names_are_case_sensitive(self, make_identity):
        identity = make_identity(organizations=[{"organization_id": "1", "role": "admin"}])
        assert classify(identity) is AccountRole.USER

    def test_custom_admin_roles(self, make_identity):
        identity = make_identity(organizations=[{"organization_id": "1", "role": "Owner"}])
        assert classify(identity, admin_roles={"Owner"}) is AccountRole.ADMIN
        assert classify(identity) is AccountRole.USER

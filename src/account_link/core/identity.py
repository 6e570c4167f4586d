"""Verified SSO identity for a single login."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class AccessScope(StrEnum):
    """Who the connecting application is open to."""

    PRIVATE = "private"
    PUBLIC = "public"


class AccountRole(StrEnum):
    ADMIN = "admin"
    USER = "user"


class OrganizationMembership(BaseModel):
    """Role held by the identity in one organization."""

    model_config = ConfigDict(frozen=True)

    organization_id: str = Field(description="Organization identifier")
    role: str = Field(description="Role name, e.g. Member, Admin, Super Admin")


class SsoIdentity(BaseModel):
    """Identity asserted by the SSO provider.

    Built by the assertion verification layer once the assertion has been
    authenticated. Nothing in this package mutates it.
    """

    model_config = ConfigDict(frozen=True)

    external_id: str = Field(min_length=1, description="Stable SSO user identifier")
    email: str = Field(description="Email address; not guaranteed unique upstream")
    given_name: str = Field(default="", description="First name")
    family_name: str = Field(default="", description="Last name")
    organizations: tuple[OrganizationMembership, ...] = Field(
        default=(), description="Organization memberships in assertion order"
    )
    is_owning_app_admin: bool = Field(
        default=False,
        description="Identity owns or administers the connecting application",
    )
    access_scope: AccessScope = Field(
        default=AccessScope.PRIVATE,
        description="Whether unknown identities may be given a local account",
    )

"""Local account domain entity."""

from pydantic import Field

from src.account_link.entities._base import Entity


class LocalAccount(Entity):
    """Account record owned by the host application.

    ``external_id`` stays empty until the account is linked to an SSO identity;
    once set it never changes. The soft fields (username, email and names) are
    overwritten from the identity on every login.
    """

    external_id: str | None = Field(
        default=None, description="Stable SSO identifier linked to this account"
    )
    username: str = Field(description="Externally visible username")
    email: str | None = Field(default=None, description="Account email address")
    given_name: str = Field(default="", description="First name")
    family_name: str = Field(default="", description="Last name")

    credential_hash: str = Field(
        description="Placeholder password hash; never used to authenticate"
    )
    auth_method: str = Field(default="manual")
    is_suspended: bool = Field(default=False)
    is_confirmed: bool = Field(default=True)
    force_password_change: bool = Field(default=False)

    locale: str = Field(default="en")
    timezone: str = Field(default="99")
    city: str | None = Field(default=None)
    country: str | None = Field(default=None)

    @property
    def is_linked(self) -> bool:
        return self.external_id is not None

    @property
    def display_name(self) -> str:
        full_name = f"{self.given_name} {self.family_name}".strip()
        return full_name or self.username

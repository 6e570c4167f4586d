"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./account_link.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def password(self) -> str | None:
        """
        Get the database password from the appropriate source.
        1. A mounted secrets file named by `password_file`
        2. An environment variable named by `password_env_var`
        3. Whatever the URL itself carries
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            import os

            password = os.getenv(self.password_env_var)
            if password:
                return password
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        from sqlalchemy.engine import make_url

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        if self.is_sqlite:
            return self.url

        base_url = make_url(self.url)
        resolved_password = self.password
        if base_url.password and base_url.password != resolved_password:
            logger.warning(
                "Database password from secrets does not match the one in the URL. "
                "Using password from secrets."
            )
        if resolved_password:
            base_url = base_url.set(password=resolved_password)
        # Render manually to avoid SQLAlchemy's password masking
        return base_url.render_as_string(hide_password=False)


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    name: str = Field(default="sso-account-link", description="Application name")


class AccountDefaultsConfig(BaseModel):
    """Attributes stamped onto a local account when it is first provisioned."""

    locale: str = Field(default="en", description="Default account language")
    timezone: str = Field(default="99", description="Default timezone (99 = site default)")
    city: str = Field(default="Sydney", description="Default city")
    country: str = Field(default="AU", description="Default ISO country code")
    auth_method: str = Field(default="manual", description="Local auth plugin name")
    is_confirmed: bool = Field(default=True, description="Mark new accounts confirmed")
    force_password_change: bool = Field(
        default=False, description="Require a password change on first local login"
    )


class ProvisioningConfig(BaseModel):
    """Policy for resolving and creating local accounts from SSO identities."""

    allowed_access_scopes: list[str] = Field(
        default_factory=lambda: ["private"],
        description="Identity access scopes allowed to auto-provision new accounts",
    )
    admin_roles: list[str] = Field(
        default_factory=lambda: ["Admin", "Super Admin", "SuperAdmin"],
        description="Organization roles that grant site administration",
    )
    site_admins: str = Field(
        default="",
        description="Comma-separated account ids seeded into the admin registry",
    )
    credential_suffix: str = Field(
        default="P!1",
        description="Suffix appended to generated passwords to satisfy complexity rules",
    )
    credential_length: int = Field(
        default=16, description="Random bytes used for the generated password"
    )
    defaults: AccountDefaultsConfig = Field(
        default_factory=AccountDefaultsConfig,
        description="Defaults for newly provisioned accounts",
    )


class RedisConfig(BaseModel):
    """Redis configuration model."""

    enabled: bool = Field(default=False, description="Enable Redis session storage")
    url: str = Field(default="", description="Redis connection URL")
    password: str | None = Field(
        default=None, description="Password for Redis authentication"
    )
    decode_responses: bool = Field(
        default=True, description="Decode Redis responses to strings"
    )

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the Redis connection string with password if provided."""
        if self.password:
            if "@" in self.url:
                # URL already has auth info
                return self.url
            parts = self.url.split("://", 1)
            if len(parts) == 2:
                scheme, rest = parts
                return f"{scheme}://:{self.password}@{rest}"
        return self.url


class SessionConfig(BaseModel):
    """Settings for sessions established after a successful login."""

    max_age: int = Field(default=3600, description="Session maximum age in seconds")
    key_prefix: str = Field(default="user", description="Storage key prefix")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    provisioning: ProvisioningConfig = Field(
        default_factory=ProvisioningConfig, description="Account provisioning policy"
    )
    redis: RedisConfig = Field(
        default_factory=RedisConfig, description="Redis configuration"
    )
    session: SessionConfig = Field(
        default_factory=SessionConfig, description="Session configuration"
    )

"""Errors raised while resolving and provisioning local accounts."""

from enum import StrEnum

from pydantic import BaseModel, Field


class AccountLinkError(Exception):
    """Base class for account resolution and provisioning failures."""


class AccessDeniedError(AccountLinkError):
    """Raised when an unknown identity may not be provisioned."""

    def __init__(self, external_id: str, access_scope: str):
        self.external_id = external_id
        self.access_scope = access_scope
        super().__init__(
            f"Access scope '{access_scope}' does not allow provisioning "
            f"an account for '{external_id}'"
        )


class PersistenceError(AccountLinkError):
    """Raised when an account store operation fails.

    ``is_duplicate`` marks unique-constraint violations, which a caller may
    recover from by resolving again; anything else should abort the login.
    """

    def __init__(self, operation: str, message: str, *, is_duplicate: bool = False):
        self.operation = operation
        self.is_duplicate = is_duplicate
        super().__init__(f"{operation} failed: {message}")


class SyncPartialFailure(BaseModel):
    """A non-fatal write failure recorded during profile synchronization."""

    operation: str = Field(description="Store operation that failed")
    detail: str = Field(description="Human readable reason")


class LoginErrorCode(StrEnum):
    ACCESS_DENIED = "access_denied"
    DUPLICATE_EXTERNAL_ID = "duplicate_external_id"
    PERSISTENCE_ERROR = "persistence_error"
    SESSION_FAILED = "session_failed"

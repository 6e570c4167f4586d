"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

# Login flow
from .login import LoginOrchestrator, LoginResult, LoginState, create_login_orchestrator
from .provisioner import AccountProvisioner
from .resolver import AccountMatch, AccountResolver, MatchedBy
from .role_classifier import classify, is_admin

# Session Services
from .session.user_session import UserSessionService
from .synchronizer import ProfileSynchronizer, SyncResult

__all__ = [
    "AccountMatch",
    "AccountProvisioner",
    "AccountResolver",
    "DbSessionService",
    "LoginOrchestrator",
    "LoginResult",
    "LoginState",
    "MatchedBy",
    "ProfileSynchronizer",
    "SyncResult",
    "UserSessionService",
    "classify",
    "create_login_orchestrator",
    "is_admin",
]

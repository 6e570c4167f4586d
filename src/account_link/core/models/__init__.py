from .session import UserSession

__all__ = ["UserSession"]

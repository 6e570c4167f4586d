"""Shared pytest fixtures and helpers."""

from .core import *  # noqa: F401,F403
from .identities import *  # noqa: F401,F403
from .services import *  # noqa: F401,F403

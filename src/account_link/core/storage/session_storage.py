"""Session storage interface and implementations.

Sessions live in Redis when it is enabled and in process memory otherwise.
"""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.account_link.runtime.config.config_data import ConfigData

T = TypeVar("T", bound=BaseModel)


class SessionStorage(ABC):
    """Abstract interface for session storage backends."""

    @abstractmethod
    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Store a session with TTL.

        Args:
            key: Session identifier
            value: Session data (Pydantic model)
            ttl_seconds: Time to live in seconds
        """

    @abstractmethod
    async def get(self, key: str, model_class: type[T]) -> T | None:
        """Retrieve a session, or None if not found/expired."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a session."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a session exists and has not expired."""


class InMemorySessionStorage(SessionStorage):
    """In-memory session storage with TTL support."""

    def __init__(self):
        self._data: dict[str, dict[str, Any]] = {}

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        self._data[key] = {
            "data": json.loads(value.model_dump_json()),
            "expires_at": time.time() + ttl_seconds,
        }

    async def get(self, key: str, model_class: type[T]) -> T | None:
        if not await self.exists(key):
            return None

        try:
            return model_class.model_validate(self._data[key]["data"])
        except ValidationError:
            # Clean up corrupted data
            del self._data[key]
            return None

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def exists(self, key: str) -> bool:
        entry = self._data.get(key)
        if entry is None:
            return False
        if time.time() > entry["expires_at"]:
            del self._data[key]
            return False
        return True


class RedisSessionStorage(SessionStorage):
    """Redis-based session storage with JSON serialization."""

    def __init__(self, redis_client):
        self._redis = redis_client

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        try:
            await self._redis.setex(key, ttl_seconds, value.model_dump_json())
        except Exception as e:
            raise RuntimeError(f"Redis set failed: {e}") from e

    async def get(self, key: str, model_class: type[T]) -> T | None:
        try:
            data = await self._redis.get(key)
        except Exception as e:
            raise RuntimeError(f"Redis get failed: {e}") from e
        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return model_class.model_validate_json(data)

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except Exception as e:
            raise RuntimeError(f"Redis delete failed: {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._redis.exists(key))
        except Exception as e:
            raise RuntimeError(f"Redis exists failed: {e}") from e


def create_session_storage(config: ConfigData) -> SessionStorage:
    """Pick the session backend the configuration asks for."""
    if config.redis.enabled and config.redis.url:
        import redis.asyncio as redis

        client = redis.from_url(
            config.redis.connection_string,
            decode_responses=config.redis.decode_responses,
        )
        return RedisSessionStorage(client)
    return InMemorySessionStorage()

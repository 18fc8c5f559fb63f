"""
Key-value store adapters for the cache gateway.
"""

import inspect
from typing import Any, Optional, Protocol, Union, runtime_checkable

import redis.asyncio as redis

from shared.config import CacheSettings
from shared.errors import ConfigurationError
from shared.logging import get_logger


@runtime_checkable
class KeyValueStore(Protocol):
    """What the gateway needs from a key-value backend."""

    async def get(self, key: str) -> Optional[Union[str, bytes]]:
        """Return the stored text for ``key`` or None when absent/expired."""
        ...

    async def set(self, key: str, value: str, ex: int) -> Any:
        """Store ``value`` under ``key``, expiring after ``ex`` seconds."""
        ...


class RedisStore:
    """Adapter over an injected ``redis.asyncio.Redis`` client.

    The client is owned by the host application: no connect, reconnect
    or close happens here.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    async def get(self, key: str) -> Optional[Union[str, bytes]]:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ex: int) -> Any:
        return await self.client.set(key, value, ex=ex)

    def __repr__(self) -> str:
        return f"RedisStore({self.client!r})"


def resolve_store(instance: Any) -> KeyValueStore:
    """Turn the configured store instance into a ``KeyValueStore``."""
    if isinstance(instance, redis.Redis):
        return RedisStore(instance)
    if instance is not None and isinstance(instance, KeyValueStore):
        # Protocol isinstance only checks attribute names.
        if inspect.iscoroutinefunction(instance.get) and inspect.iscoroutinefunction(instance.set):
            return instance
        raise ConfigurationError(
            "Key-value store get() and set() must be coroutine functions",
            {"instance_type": type(instance).__name__}
        )
    raise ConfigurationError(
        "You need to specify a Redis instance or a key-value store object",
        {"instance_type": type(instance).__name__}
    )


def create_redis_client(settings: CacheSettings) -> redis.Redis:
    """Build a Redis client for the host application from settings."""
    logger = get_logger("cache.store")
    client = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.socket_connect_timeout,
        socket_timeout=settings.socket_timeout,
        retry_on_timeout=True,
        health_check_interval=settings.health_check_interval
    )
    logger.info("Redis client created", env=settings.env)
    return client

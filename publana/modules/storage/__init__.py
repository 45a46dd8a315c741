"""
Storage Module - Black Box Interface

Purpose: Abstract option persistence (the host's key-value "options")
Interface: get(), set(), ping(), close()
Hidden: Redis specifics, connection handling, serialization

Can be replaced with any storage backend without affecting other modules.
"""

import json
import logging
from typing import Any, Dict, Optional, Protocol

import redis.asyncio as redis

from publana.config.provider import StorageConfig

logger = logging.getLogger(__name__)

OPTION_PREFIX = "publana:option:"


class OptionStore(Protocol):
    """Protocol for option persistence backends."""

    async def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default when absent."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Replace the stored value for key."""
        ...

    async def ping(self) -> bool:
        """Return True when the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


class RedisOptionStore:
    """Option store keeping JSON-encoded values in Redis."""

    def __init__(self, redis_client, prefix: str = OPTION_PREFIX):
        """
        Initialize option store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
            prefix: Key prefix for every option
        """
        self.redis = redis_client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get(self, key: str, default: Any = None) -> Any:
        raw = await self.redis.get(self._key(key))
        if raw is None:
            return default

        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding malformed option value for '{key}'")
            return default

    async def set(self, key: str, value: Any) -> None:
        await self.redis.set(self._key(key), json.dumps(value))

    async def ping(self) -> bool:
        return bool(await self.redis.ping())

    async def close(self) -> None:
        await self.redis.aclose()


class MemoryOptionStore:
    """Process-local option store for development and tests."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._values[key] = json.dumps(value)

    async def get(self, key: str, default: Any = None) -> Any:
        if key not in self._values:
            return default
        # Stored as JSON so callers never share a mutable value with the store
        return json.loads(self._values[key])

    async def set(self, key: str, value: Any) -> None:
        self._values[key] = json.dumps(value)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


def create_option_store(config: StorageConfig) -> OptionStore:
    """Build the option store selected by configuration."""
    if config.backend == "memory":
        logger.info("Using in-memory option store")
        return MemoryOptionStore()

    client = redis.from_url(
        config.redis_url,
        password=config.redis_password,
        encoding="utf-8",
        decode_responses=True,
    )
    logger.info(f"Using Redis option store at {config.redis_host}:{config.redis_port}")
    return RedisOptionStore(client)


__all__ = ["OptionStore", "RedisOptionStore", "MemoryOptionStore", "create_option_store"]

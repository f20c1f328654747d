"""
Key-value store backends for the booked-seat record.
Separated from business logic for clean architecture.

Implementations:
- RedisStore: durable, shared across restarts
- InMemoryStore: process-local, for tests and local runs
"""

from abc import ABC, abstractmethod
from typing import Optional

import redis

from seat_booking.core.config import Settings
from seat_booking.core.logging import get_logger

logger = get_logger(__name__)


class StoreUnavailableError(Exception):
    """Raised by a store backend when the medium cannot be reached."""


class StoreValueCorruptError(Exception):
    """Raised by a store backend when a stored value cannot be decoded."""


class KeyValueStore(ABC):
    """Opaque string-keyed get/set/remove store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        pass


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class RedisStore(KeyValueStore):
    """Redis-backed store. Every redis failure surfaces as StoreUnavailableError."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        return cls(
            redis.Redis.from_url(
                url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30,
            )
        )

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except UnicodeDecodeError as e:
            raise StoreValueCorruptError(str(e)) from e
        except redis.RedisError as e:
            raise StoreUnavailableError(str(e)) from e

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except redis.RedisError as e:
            raise StoreUnavailableError(str(e)) from e

    def remove(self, key: str) -> None:
        try:
            self.client.delete(key)
        except redis.RedisError as e:
            raise StoreUnavailableError(str(e)) from e

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        self.client.close()


def create_store(settings: Settings) -> Optional[KeyValueStore]:
    """
    Build the configured store backend.
    Returns None when persistence is disabled or Redis is unreachable;
    the seat map then simply runs without durability.
    """
    if settings.STORE_BACKEND == "none":
        return None

    if settings.STORE_BACKEND == "memory":
        return InMemoryStore()

    store = RedisStore.from_url(settings.REDIS_URL)
    if not store.ping():
        logger.error("redis_connection_failed", url=settings.REDIS_URL)
        store.close()
        return None

    logger.info("redis_connected", url=settings.REDIS_URL)
    return store

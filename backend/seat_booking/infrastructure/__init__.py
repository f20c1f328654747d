"""
Infrastructure layer - external system integrations.
Keeps business logic clean from implementation details.
"""

from .store import (
    InMemoryStore,
    KeyValueStore,
    RedisStore,
    StoreUnavailableError,
    StoreValueCorruptError,
    create_store,
)

__all__ = ['InMemoryStore', 'KeyValueStore', 'RedisStore', 'StoreUnavailableError',
           'StoreValueCorruptError', 'create_store']

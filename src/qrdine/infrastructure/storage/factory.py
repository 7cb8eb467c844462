from __future__ import annotations

from qrdine.application.ports.storage import KeyValueStore
from qrdine.config import Settings
from qrdine.infrastructure.storage.memory import InMemoryKeyValueStore


def build_key_value_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "redis":
        from qrdine.infrastructure.storage.redis_store import RedisKeyValueStore

        return RedisKeyValueStore(redis_url=settings.redis_url, key_prefix=settings.key_prefix)
    if settings.storage_backend == "sql":
        from qrdine.infrastructure.storage.sql_store import SqlKeyValueStore

        return SqlKeyValueStore(database_url=settings.database_url, key_prefix=settings.key_prefix)
    return InMemoryKeyValueStore()

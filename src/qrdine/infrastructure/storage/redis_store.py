from __future__ import annotations

import redis

from qrdine.application.ports.storage import KeyValueStore, StorageUnavailableError
from qrdine.infrastructure.storage.redis_client import get_redis_client


class RedisKeyValueStore(KeyValueStore):
    def __init__(
        self,
        redis_url: str | None = None,
        key_prefix: str = "",
        timeout_seconds: float = 1.0,
        client: redis.Redis | None = None,
    ) -> None:
        if client is None and not redis_url:
            raise RuntimeError("REDIS_URL is not set")
        self._redis_url = redis_url
        self._client = client
        self._key_prefix = key_prefix
        self._timeout_seconds = timeout_seconds

    def _redis(self) -> redis.Redis:
        if self._client is not None:
            return self._client
        return get_redis_client(self._redis_url, timeout_seconds=self._timeout_seconds)

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    def read(self, key: str) -> str | None:
        try:
            value = self._redis().get(self._key(key))
        except redis.RedisError as exc:
            raise StorageUnavailableError(f"redis read failed for {key}") from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def write(self, key: str, value: str) -> None:
        try:
            self._redis().set(name=self._key(key), value=value)
        except redis.RedisError as exc:
            raise StorageUnavailableError(f"redis write failed for {key}") from exc

    def delete(self, key: str) -> None:
        try:
            self._redis().delete(self._key(key))
        except redis.RedisError as exc:
            raise StorageUnavailableError(f"redis delete failed for {key}") from exc

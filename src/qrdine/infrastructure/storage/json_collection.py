from __future__ import annotations

import json
import logging
from typing import Any, Callable, TypeVar

from qrdine.application.ports.storage import KeyValueStore, StorageCorruptError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonCollection:
    """A JSON array stored whole under one key.

    Every write replaces the full array. A value that does not parse, or
    whose records do not convert, is discarded and treated as absent.
    """

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self.key = key

    def exists(self) -> bool:
        return self._store.read(self.key) is not None

    def _parse(self, raw: str) -> list[dict[str, Any]]:
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageCorruptError(f"{self.key} is not valid JSON") from exc
        if not isinstance(value, list) or not all(isinstance(row, dict) for row in value):
            raise StorageCorruptError(f"{self.key} is not a JSON array of objects")
        return value

    def _discard(self, exc: Exception) -> None:
        logger.warning("storage_corrupt key=%s reason=%s", self.key, exc)
        self._store.delete(self.key)

    def load(self, convert: Callable[[dict[str, Any]], T]) -> list[T] | None:
        """Return converted records, or None when the key is absent or was corrupt."""
        raw = self._store.read(self.key)
        if raw is None:
            return None
        try:
            rows = self._parse(raw)
            try:
                return [convert(row) for row in rows]
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                raise StorageCorruptError(f"{self.key} holds an invalid record") from exc
        except StorageCorruptError as exc:
            self._discard(exc)
            return None

    def save(self, rows: list[dict[str, Any]]) -> None:
        self._store.write(self.key, json.dumps(rows, ensure_ascii=False, separators=(",", ":")))

    def clear(self) -> None:
        self._store.delete(self.key)

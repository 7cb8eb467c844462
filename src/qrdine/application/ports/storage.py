from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class StorageCorruptError(Exception):
    pass


class StorageUnavailableError(Exception):
    pass

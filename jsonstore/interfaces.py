from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")


class KeyValueStore(Protocol[T]):
    """
    Minimal DB-friendly interface: typed values under string keys.
    """

    def get(self, key: str) -> T:
        """Return the value for key; raise NotFoundError when absent."""
        ...

    def set(self, key: str, value: T) -> None:
        """Insert or overwrite key and persist."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present and persist; absent keys are not an error."""
        ...

    def keys(self) -> list[str]:
        """Snapshot of current keys, in no particular order."""
        ...


class AsyncKeyValueStore(Protocol[T]):
    async def get(self, key: str) -> T: ...
    async def set(self, key: str, value: T) -> None: ...
    async def delete(self, key: str) -> None: ...
    async def keys(self) -> list[str]: ...

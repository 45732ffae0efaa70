from __future__ import annotations

import asyncio
import os
from typing import Generic, TypeVar

from .codec import Codec
from .interfaces import AsyncKeyValueStore
from .store import JsonStore

T = TypeVar("T")


class AsyncJsonStore(AsyncKeyValueStore[T], Generic[T]):
    """
    Async wrapper around a JsonStore.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O and lock waits.
    """

    def __init__(self, store: JsonStore[T]) -> None:
        self._store = store

    @classmethod
    async def open(
        cls,
        path: str | os.PathLike[str],
        codec: Codec[T] | None = None,
        *,
        indent: int | None = 2,
        fsync: bool = False,
    ) -> "AsyncJsonStore[T]":
        store = await asyncio.to_thread(JsonStore, path, codec, indent=indent, fsync=fsync)
        return cls(store)

    @property
    def store(self) -> JsonStore[T]:
        return self._store

    async def get(self, key: str) -> T:
        return await asyncio.to_thread(self._store.get, key)

    async def set(self, key: str, value: T) -> None:
        await asyncio.to_thread(self._store.set, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._store.delete, key)

    async def keys(self) -> list[str]:
        return await asyncio.to_thread(self._store.keys)

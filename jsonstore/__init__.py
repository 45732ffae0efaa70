from __future__ import annotations

from .aio import AsyncJsonStore
from .codec import Codec, PydanticCodec
from .errors import DecodeError, EncodeError, NotFoundError, StoreError, StoreIOError
from .interfaces import AsyncKeyValueStore, KeyValueStore
from .locks import ReadWriteLock
from .settings import Settings, get_settings, open_store
from .store import JsonStore

__all__ = [
    "JsonStore",
    "AsyncJsonStore",
    "Codec",
    "PydanticCodec",
    "KeyValueStore",
    "AsyncKeyValueStore",
    "ReadWriteLock",
    "Settings",
    "get_settings",
    "open_store",
    "StoreError",
    "StoreIOError",
    "DecodeError",
    "EncodeError",
    "NotFoundError",
]

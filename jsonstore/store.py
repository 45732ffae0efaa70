from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Generic, TypeVar

from .codec import Codec, PydanticCodec
from .errors import NotFoundError, StoreIOError
from .interfaces import KeyValueStore
from .json_file import atomic_write_bytes, parse_document, read_raw, render_document, write_new
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")


class JsonStore(KeyValueStore[T], Generic[T]):
    """
    Key-value store persisted as a single JSON object on disk.

    - Each entry is kept encoded in memory and only decoded by ``get``.
    - Every mutation rewrites the whole document (temp file + rename) while
      holding the exclusive lock.
    - One process, one store per path.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        codec: Codec[T] | None = None,
        *,
        indent: int | None = 2,
        fsync: bool = False,
    ):
        self._path = Path(path)
        self._codec: Codec[T] = codec if codec is not None else PydanticCodec()
        self._indent = indent
        self._fsync = fsync
        self._lock = ReadWriteLock()
        self._entries: dict[str, bytes] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def codec(self) -> Codec[T]:
        return self._codec

    def _load(self) -> None:
        try:
            raw = read_raw(self._path)
            if raw is None:
                write_new(self._path)
                logger.info("JSONSTORE: created empty store at %s", self._path)
                return
        except OSError as e:
            raise StoreIOError(f"cannot open store at {self._path}: {e}") from e

        if not raw:
            # zero-length file: empty store, rewritten on the next mutation
            return
        self._entries = parse_document(raw)
        logger.debug("JSONSTORE: loaded %d entries from %s", len(self._entries), self._path)

    def _persist(self) -> None:
        # caller holds the write lock
        payload = render_document(self._entries, indent=self._indent)
        try:
            atomic_write_bytes(self._path, payload, fsync=self._fsync)
        except OSError as e:
            logger.warning("JSONSTORE: failed to persist %s: %r", self._path, e)
            raise StoreIOError(f"cannot persist store at {self._path}: {e}") from e
        logger.debug("JSONSTORE: persisted %d entries to %s", len(self._entries), self._path)

    def set(self, key: str, value: T) -> None:
        encoded = self._codec.encode(value)
        with self._lock.write():
            self._entries[key] = encoded
            self._persist()

    def get(self, key: str) -> T:
        with self._lock.read():
            raw = self._entries.get(key)
        if raw is None:
            raise NotFoundError(key)
        return self._codec.decode(raw)

    def get_or_default(self, key: str, default: D | None = None) -> T | D | None:
        try:
            return self.get(key)
        except NotFoundError:
            return default

    def delete(self, key: str) -> None:
        with self._lock.write():
            self._entries.pop(key, None)
            self._persist()

    def keys(self) -> list[str]:
        with self._lock.read():
            return list(self._entries)

    def __contains__(self, key: Any) -> bool:
        with self._lock.read():
            return key in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __repr__(self) -> str:
        return f"JsonStore(path={str(self._path)!r}, codec={self._codec!r})"

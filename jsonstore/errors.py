from __future__ import annotations


class StoreError(Exception):
    """Base class for every error raised by a store."""


class StoreIOError(StoreError, OSError):
    """Creating, reading, writing or renaming the backing file failed."""


class DecodeError(StoreError, ValueError):
    """The backing file or a single entry could not be parsed."""


class EncodeError(StoreError, ValueError):
    """A value handed to ``set`` could not be serialized."""


class NotFoundError(StoreError, KeyError):
    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key not found: {self.key!r}"

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .codec import Codec
from .errors import StoreIOError
from .store import JsonStore

DEFAULT_PATH = "data/store.json"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_indent(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    if raw.strip().lower() in ("none", "compact"):
        return None
    try:
        return max(0, int(raw))
    except ValueError:
        raise ValueError(f"{name} must be an integer, 'none' or 'compact', got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    path: Path
    indent: int | None
    # fsync the temp file before the rename; off by default like most JSON writers
    fsync: bool


def get_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    if env_file is not None:
        load_dotenv(env_file)

    path = Path(os.getenv("JSONSTORE_PATH", "").strip() or DEFAULT_PATH)
    indent = _env_indent("JSONSTORE_INDENT", 2)
    fsync = _env_bool("JSONSTORE_FSYNC", False)

    return Settings(path=path, indent=indent, fsync=fsync)


def open_store(codec: Codec[Any] | None = None, *, settings: Settings | None = None) -> JsonStore[Any]:
    st = settings or get_settings()
    # the store itself never creates directories; the configured location may be nested
    try:
        st.path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreIOError(f"cannot create directory for {st.path}: {e}") from e
    return JsonStore(st.path, codec, indent=st.indent, fsync=st.fsync)

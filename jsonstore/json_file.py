from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Mapping

from .errors import DecodeError

EMPTY_DOCUMENT = b"{}"
TMP_SUFFIX = ".tmp"
FILE_MODE = 0o644


def tmp_path_for(path: Path) -> Path:
    return path.with_name(path.name + TMP_SUFFIX)


def read_raw(path: Path) -> bytes | None:
    """
    Read the backing file as bytes.

    Returns None when the file does not exist; any other OSError propagates.
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON constant {name}")


# numbers are only validated here; their source text is what gets kept
_SCANNER = json.JSONDecoder(parse_float=str, parse_int=str, parse_constant=_reject_constant)
_WS = re.compile(r"[ \t\n\r]*")


def _skip_ws(text: str, idx: int) -> int:
    return _WS.match(text, idx).end()


def _expect(text: str, idx: int, chars: str) -> str:
    ch = text[idx:idx + 1]
    if not ch or ch not in chars:
        found = repr(ch) if ch else "end of file"
        raise DecodeError(f"backing file: expected one of {chars!r} at offset {idx}, found {found}")
    return ch


def parse_document(raw: bytes) -> dict[str, bytes]:
    """
    Parse a backing file into ``key -> encoded value``.

    Each value keeps its exact source text, so entries stay opaque until they
    are read and are written back unchanged.
    """
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DecodeError(f"backing file is not UTF-8: {e}") from e

    idx = _skip_ws(text, 0)
    if text[idx:idx + 1] != "{":
        try:
            doc = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            raise DecodeError(f"backing file is not valid JSON: {e}") from e
        raise DecodeError(f"backing file must hold a JSON object, got {type(doc).__name__}")

    entries: dict[str, bytes] = {}
    idx = _skip_ws(text, idx + 1)
    if text[idx:idx + 1] == "}":
        idx += 1
    else:
        while True:
            _expect(text, idx, '"')
            try:
                key, idx = _SCANNER.raw_decode(text, idx)
                idx = _skip_ws(text, idx)
                _expect(text, idx, ":")
                start = _skip_ws(text, idx + 1)
                _, idx = _SCANNER.raw_decode(text, start)
            except DecodeError:
                raise
            except ValueError as e:
                raise DecodeError(f"backing file is not valid JSON: {e}") from e
            # duplicate keys: last one wins
            entries[key] = text[start:idx].encode("utf-8")
            idx = _skip_ws(text, idx)
            if _expect(text, idx, ",}") == "}":
                idx += 1
                break
            idx = _skip_ws(text, idx + 1)

    if _skip_ws(text, idx) != len(text):
        raise DecodeError(f"backing file has extra data after offset {idx}")
    return entries


def render_document(entries: Mapping[str, bytes], *, indent: int | None = 2) -> bytes:
    """Splice already-encoded entries into one JSON object, keys sorted."""
    if not entries:
        return EMPTY_DOCUMENT + b"\n"
    fields = [
        (json.dumps(k, ensure_ascii=False).encode("utf-8"), entries[k]) for k in sorted(entries)
    ]
    if indent is None:
        body = b",".join(k + b":" + v for k, v in fields)
        return b"{" + body + b"}\n"
    pad = b" " * indent
    body = b",\n".join(pad + k + b": " + v for k, v in fields)
    return b"{\n" + body + b"\n}\n"


def _open_with_mode(mode: int):
    def opener(file: str, flags: int) -> int:
        return os.open(file, flags, mode)

    return opener


def write_new(path: Path, payload: bytes = EMPTY_DOCUMENT, *, mode: int = FILE_MODE) -> None:
    with open(path, "wb", opener=_open_with_mode(mode)) as f:
        f.write(payload)


def atomic_write_bytes(path: Path, payload: bytes, *, fsync: bool = False, mode: int = FILE_MODE) -> None:
    """
    Atomically write bytes to disk by writing to a temp file then replacing.
    """
    tmp_path = tmp_path_for(path)
    with open(tmp_path, "wb", opener=_open_with_mode(mode)) as f:
        f.write(payload)
        if fsync:
            f.flush()
            os.fsync(f.fileno())
    os.replace(tmp_path, path)

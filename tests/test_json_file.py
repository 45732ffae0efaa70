from __future__ import annotations

import pytest

from jsonstore import DecodeError
from jsonstore.json_file import parse_document, render_document


def test_values_keep_their_source_text():
    doc = parse_document(b'{"a": [1, 2], "b" : {"c": "x"}, "n": 1.50}')
    assert doc == {"a": b"[1, 2]", "b": b'{"c": "x"}', "n": b"1.50"}


def test_empty_object_and_bom():
    assert parse_document(b" { } \n") == {}
    assert parse_document(b'\xef\xbb\xbf{"a": 1}') == {"a": b"1"}


def test_duplicate_keys_last_wins():
    assert parse_document(b'{"a": 1, "a": 2}') == {"a": b"2"}


@pytest.mark.parametrize(
    "raw",
    [
        b'{"a": 1} x',
        b'{"a" 1}',
        b'{"a": 1,}',
        b"{a: 1}",
        b'{"a": 1',
        b'{"a": [1, Infinity]}',
        b"\xff{}",
    ],
)
def test_malformed_documents(raw: bytes):
    with pytest.raises(DecodeError):
        parse_document(raw)


def test_render_sorts_and_splices():
    out = render_document({"b": b"2", "a": b"[1, 2]"})
    assert out == b'{\n  "a": [1, 2],\n  "b": 2\n}\n'
    assert parse_document(out) == {"a": b"[1, 2]", "b": b"2"}

from __future__ import annotations

import threading
import time

import pytest

from jsonstore.locks import ReadWriteLock


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def _reader():
        with lock.read():
            both_inside.wait()

    threads = [threading.Thread(target=_reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not both_inside.broken


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    entered = threading.Event()

    def _reader():
        with lock.read():
            entered.set()

    lock.acquire_write()
    t = threading.Thread(target=_reader)
    t.start()
    assert not entered.wait(0.1)

    lock.release_write()
    assert entered.wait(5)
    t.join(timeout=5)


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    writer_done = threading.Event()
    late_reader_in = threading.Event()

    lock.acquire_read()

    def _writer():
        with lock.write():
            writer_done.set()

    def _late_reader():
        with lock.read():
            late_reader_in.set()

    w = threading.Thread(target=_writer)
    w.start()
    # give the writer time to queue up
    while not lock._writers_waiting:
        time.sleep(0.01)

    r = threading.Thread(target=_late_reader)
    r.start()
    assert not late_reader_in.wait(0.1)

    lock.release_read()
    assert writer_done.wait(5)
    assert late_reader_in.wait(5)
    w.join(timeout=5)
    r.join(timeout=5)


def test_release_without_acquire():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()

import threading
import time

import pytest

from expiring_cache.utils.locks import ReadWriteLock


def test_read_lock_is_shared():
    lock = ReadWriteLock()
    lock.acquire_read()
    lock.acquire_read()
    assert lock.readers == 2
    lock.release_read()
    lock.release_read()
    assert lock.readers == 0


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    acquired = threading.Event()

    def write() -> None:
        with lock.write_locked():
            acquired.set()

    lock.acquire_read()
    thread = threading.Thread(target=write)
    thread.start()
    assert not acquired.wait(0.1)
    lock.release_read()
    assert acquired.wait(2)
    thread.join(timeout=2)
    assert not lock.write_held


def test_reader_waits_for_writer():
    lock = ReadWriteLock()
    acquired = threading.Event()

    def read() -> None:
        with lock.read_locked():
            acquired.set()

    lock.acquire_write()
    thread = threading.Thread(target=read)
    thread.start()
    assert not acquired.wait(0.1)
    lock.release_write()
    assert acquired.wait(2)
    thread.join(timeout=2)


def test_waiting_writer_blocks_new_readers():
    lock = ReadWriteLock()
    order = []

    def write() -> None:
        with lock.write_locked():
            order.append("write")

    def read() -> None:
        with lock.read_locked():
            order.append("read")

    lock.acquire_read()
    writer = threading.Thread(target=write)
    writer.start()
    time.sleep(0.1)
    reader = threading.Thread(target=read)
    reader.start()
    time.sleep(0.1)
    assert order == []
    lock.release_read()
    writer.join(timeout=2)
    reader.join(timeout=2)
    assert order == ["write", "read"]


def test_lock_released_when_body_raises():
    lock = ReadWriteLock()
    with pytest.raises(ValueError):
        with lock.write_locked():
            raise ValueError("boom")
    assert not lock.write_held
    with pytest.raises(ValueError):
        with lock.read_locked():
            raise ValueError("boom")
    assert lock.readers == 0


def test_release_without_acquire_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()

"""Unit tests for the LinkMemoryDAO and its ReadWriteLock

Test coverage includes:

1. Insertion and retrieval
2. Conflict detection (digest before code)
3. Counter operations, including concurrent callers
4. Reader/writer lock behavior
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from snowdrift.dao.memory import LinkMemoryDAO, ReadWriteLock
from snowdrift.dao.exceptions import CodeExistsError, DigestExistsError, LinkNotFoundError


@pytest.fixture
def dao():
    return LinkMemoryDAO()


# -------------------------------
# 1. Insertion and retrieval
# -------------------------------


def test_add_and_get(dao):
    dao.add('https://example.com/test', 'f00d', 'abc123')

    assert dao.get_code('f00d') == 'abc123'
    assert dao.get_url('abc123') == 'https://example.com/test'


def test_get_missing_entries(dao):
    with pytest.raises(LinkNotFoundError):
        dao.get_code('f00d')
    with pytest.raises(LinkNotFoundError):
        dao.get_url('doesNotExist')


def test_add_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.add('https://example.com/test', 'f00d', None)


# -------------------------------
# 2. Conflict detection
# -------------------------------


def test_add_same_digest_twice(dao):
    dao.add('https://example.com/test', 'f00d', 'abc123')

    with pytest.raises(DigestExistsError):
        dao.add('https://example.com/test', 'f00d', 'xyz789')
    # first write wins
    assert dao.get_code('f00d') == 'abc123'
    with pytest.raises(LinkNotFoundError):
        dao.get_url('xyz789')


def test_add_same_code_twice(dao):
    dao.add('https://example.com/test', 'f00d', 'abc123')

    with pytest.raises(CodeExistsError):
        dao.add('https://example.com/other', 'beef', 'abc123')
    assert dao.get_url('abc123') == 'https://example.com/test'
    with pytest.raises(LinkNotFoundError):
        dao.get_code('beef')


def test_concurrent_adds_on_same_digest(dao):
    """Exactly one of many racing writers wins."""

    def add(i: int) -> bool:
        try:
            dao.add(f'https://example.com/{i}', 'f00d', f'code{i}')
        except DigestExistsError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(add, range(200)))

    assert results.count(True) == 1
    assert len(dao.url_codes) == 1
    assert len(dao.code_urls) == 1


# -------------------------------
# 3. Counter operations
# -------------------------------


def test_next_id_starts_at_one_and_increases(dao):
    assert [dao.next_id() for _ in range(3)] == [1, 2, 3]


def test_next_id_is_unique_across_threads(dao):
    with ThreadPoolExecutor(max_workers=32) as pool:
        ids = list(pool.map(lambda _: dao.next_id(), range(5000)))

    assert len(set(ids)) == 5000
    assert sorted(ids) == list(range(1, 5001))


# -------------------------------
# 4. Reader/writer lock
# -------------------------------


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=5)

    def reader():
        with lock.read():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert not inside.broken


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    events = []
    reading = threading.Event()
    release = threading.Event()

    def reader():
        with lock.read():
            reading.set()
            release.wait(timeout=5)
            events.append('read')

    def writer():
        reading.wait(timeout=5)
        with lock.write():
            events.append('write')

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for thread in threads:
        thread.start()
    reading.wait(timeout=5)
    release.set()
    for thread in threads:
        thread.join(timeout=5)

    assert events == ['read', 'write']

"""Behavior every LinkBaseDAO implementation must share

The same scenarios run against the in-memory backend and the S3 backend
(over a dict-backed S3 client). The Redis backend is covered with mocks in
tests/unit/dao/redis since its guarantees live in the server.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from snowdrift.dao.base import LinkBaseDAO
from snowdrift.dao.memory import LinkMemoryDAO
from snowdrift.dao.s3 import LinkS3DAO
from snowdrift.dao.exceptions import CodeExistsError, DigestExistsError, LinkNotFoundError


@pytest.fixture(params=['memory', 's3'])
def dao(request, fake_s3_client, app_prefix) -> LinkBaseDAO:
    if request.param == 'memory':
        return LinkMemoryDAO()
    return LinkS3DAO(id_allocator=LinkMemoryDAO(), bucket='test-bucket', s3_client=fake_s3_client, prefix=app_prefix)


def test_add_then_get_both_directions(dao):
    dao.add('https://example.com/a', 'digest-a', 'code-a')

    assert dao.get_code('digest-a') == 'code-a'
    assert dao.get_url('code-a') == 'https://example.com/a'


def test_missing_entries_raise_not_found(dao):
    with pytest.raises(LinkNotFoundError):
        dao.get_code('digest-a')
    with pytest.raises(LinkNotFoundError):
        dao.get_url('code-a')


def test_digest_conflict_leaves_store_unchanged(dao):
    dao.add('https://example.com/a', 'digest-a', 'code-a')

    with pytest.raises(DigestExistsError):
        dao.add('https://example.com/a', 'digest-a', 'code-b')

    assert dao.get_code('digest-a') == 'code-a'
    with pytest.raises(LinkNotFoundError):
        dao.get_url('code-b')


def test_code_conflict_leaves_store_unchanged(dao):
    dao.add('https://example.com/a', 'digest-a', 'code-a')

    with pytest.raises(CodeExistsError):
        dao.add('https://example.com/b', 'digest-b', 'code-a')

    assert dao.get_url('code-a') == 'https://example.com/a'
    with pytest.raises(LinkNotFoundError):
        dao.get_code('digest-b')


def test_digest_conflict_is_reported_before_code_conflict(dao):
    dao.add('https://example.com/a', 'digest-a', 'code-a')

    with pytest.raises(DigestExistsError):
        dao.add('https://example.com/a', 'digest-a', 'code-a')


def test_next_id_is_positive_and_unique(dao):
    ids = [dao.next_id() for _ in range(100)]

    assert min(ids) >= 1
    assert len(set(ids)) == 100


def test_racing_writers_on_one_digest(dao):
    def add(i: int) -> str | None:
        try:
            dao.add('https://example.com/hot', 'digest-hot', f'code-{i}')
        except DigestExistsError:
            return None
        return f'code-{i}'

    with ThreadPoolExecutor(max_workers=8) as pool:
        winners = [code for code in pool.map(add, range(50)) if code is not None]

    assert len(winners) == 1
    assert dao.get_code('digest-hot') == winners[0]
    assert dao.get_url(winners[0]) == 'https://example.com/hot'

"""In-memory Data Access Object (DAO) implementation for links

Suitable for single-instance deployments and tests. Nothing is persisted.

Classes:
    ReadWriteLock:
        Lock allowing many concurrent readers or a single writer.

    LinkMemoryDAO:
        DAO storing links in process memory.

Example:
    >>> from snowdrift.dao.memory import LinkMemoryDAO
    >>> dao = LinkMemoryDAO()
    >>> dao.add('https://example.com', 'f00d', 'bDx9')
    >>> dao.get_url('bDx9')
    'https://example.com'
"""

import itertools
import threading
from contextlib import contextmanager
from collections.abc import Iterator

from beartype import beartype

from snowdrift.dao.base import LinkBaseDAO
from snowdrift.dao.exceptions import CodeExistsError, DigestExistsError, LinkNotFoundError


class ReadWriteLock:
    """Many readers or one writer. Writers wait for active readers to leave."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._cond.wait_for(lambda: self._readers == 0)
            yield


class LinkMemoryDAO(LinkBaseDAO):
    """In-memory DAO for link mappings

    Attributes:
        url_codes (dict[str, str]):
            digest -> code mapping.
        code_urls (dict[str, str]):
            code -> long URL mapping.
    """

    def __init__(self):
        self.url_codes: dict[str, str] = {}
        self.code_urls: dict[str, str] = {}
        self._lock = ReadWriteLock()
        self._ids = itertools.count(1)
        self._ids_lock = threading.Lock()

    @beartype
    def add(self, long_url: str, digest: str, code: str, **kwargs) -> None:
        with self._lock.write():
            if digest in self.url_codes:
                raise DigestExistsError(f"URL with digest '{digest}' already exists.")
            if code in self.code_urls:
                raise CodeExistsError(f"Link with code '{code}' already exists.")
            self.url_codes[digest] = code
            self.code_urls[code] = long_url

    @beartype
    def get_code(self, digest: str, **kwargs) -> str:
        with self._lock.read():
            code = self.url_codes.get(digest)
        if code is None:
            raise LinkNotFoundError(f"URL with digest '{digest}' not found.")
        return code

    @beartype
    def get_url(self, code: str, **kwargs) -> str:
        with self._lock.read():
            long_url = self.code_urls.get(code)
        if long_url is None:
            raise LinkNotFoundError(f"Link with code '{code}' not found.")
        return long_url

    @beartype
    def next_id(self, **kwargs) -> int:
        with self._ids_lock:
            return next(self._ids)

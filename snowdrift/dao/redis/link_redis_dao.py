"""Data Access Object (DAO) implementation for managing links in Redis

This module provides a Redis-based implementation of LinkBaseDAO.

Responsibilities:
    - Insert links with first-writer-wins semantics on both digest and code;
    - Resolve digests to codes and codes to long URLs;
    - Increment the global identifier counter;
    - Translate Redis connectivity issues into DAO exceptions.

Key layout (see RedisKeySchema):
    <prefix>:url:<digest>  -> code
    <prefix>:code:<code>   -> long URL
    <prefix>:id            -> identifier counter

Classes:
    LinkRedisDAO:
        DAO for storing and retrieving links in a Redis datastore.

Example:
    >>> from snowdrift.dao.redis import LinkRedisDAO

    >>> dao = LinkRedisDAO(prefix="snowdrift:dev")
    >>> dao.next_id()
    1
    >>> dao.add('https://example.com/page', 'f00d', 'bDx9')
    >>> dao.get_code('f00d')
    'bDx9'
    >>> dao.get_url('bDx9')
    'https://example.com/page'
"""

import logging

import redis
from beartype import beartype

from snowdrift.dao.base import LinkBaseDAO
from snowdrift.dao.redis.mixins import RedisClientMixin
from snowdrift.dao.redis.helpers import handle_redis_connection_error
from snowdrift.dao.exceptions import CodeExistsError, DigestExistsError, LinkNotFoundError


logger = logging.getLogger(__name__)


class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing link mappings

    This class implements the LinkBaseDAO interface using Redis as a data store.
    It doubles as an IDAllocator for DAOs without a native counter (see LinkS3DAO).

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        add(long_url: str, digest: str, code: str, **kwargs) -> None:
            Insert both mappings of a link in a single transaction.
            Raises DigestExistsError / CodeExistsError on conflicts.
            Raises DataStoreError on connectivity issues with Redis.

        get_code(digest: str, **kwargs) -> str:
            Raises LinkNotFoundError when the digest doesn't exist.

        get_url(code: str, **kwargs) -> str:
            Raises LinkNotFoundError when the code doesn't exist.

        next_id(**kwargs) -> int:
            INCR the global identifier counter.
    """

    @handle_redis_connection_error
    @beartype
    def add(self, long_url: str, digest: str, code: str, **kwargs) -> None:
        """Insert a link mapping into Redis

        Both keys are checked under WATCH and written by a single MULTI/EXEC
        transaction with SET NX, so no reader can see one key without the other.
        If a concurrent client touches either key between the check and EXEC,
        the transaction is aborted (WatchError) and the check runs again, which
        then reports the conflict the other client created.

        Args:
            long_url (str):
                The original long URL.
            digest (str):
                Fingerprint of long_url.
            code (str):
                Code the link resolves by.
            **kwargs:
                Optional keyword arguments (for future use).

        Raises:
            DigestExistsError:
                If the digest is already mapped to a code.
            CodeExistsError:
                If the code is already mapped to a long URL.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        url_key = self.keys.url_key(digest)
        code_key = self.keys.code_key(code)

        with self.redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    pipe.watch(url_key, code_key)
                    if pipe.exists(url_key):
                        raise DigestExistsError(f"URL with digest '{digest}' already exists.")
                    if pipe.exists(code_key):
                        raise CodeExistsError(f"Link with code '{code}' already exists.")

                    pipe.multi()
                    pipe.set(url_key, code, nx=True)
                    pipe.set(code_key, long_url, nx=True)
                    pipe.execute()
                    return
                except redis.exceptions.WatchError:
                    logger.debug('Concurrent write on link keys, re-checking.', extra={'digest': digest, 'code': code})
                    continue

    @handle_redis_connection_error
    @beartype
    def get_code(self, digest: str, **kwargs) -> str:
        code = self.redis.get(self.keys.url_key(digest))
        if code is None:
            raise LinkNotFoundError(f"URL with digest '{digest}' not found.")
        return code

    @handle_redis_connection_error
    @beartype
    def get_url(self, code: str, **kwargs) -> str:
        long_url = self.redis.get(self.keys.code_key(code))
        if long_url is None:
            raise LinkNotFoundError(f"Link with code '{code}' not found.")
        return long_url

    @handle_redis_connection_error
    @beartype
    def next_id(self, **kwargs) -> int:
        """INCR the global identifier counter

        Returns:
            int: The incremented counter value (1 on an empty data store).

        Example:
            >>> dao.next_id()
            124
        """
        return int(self.redis.incr(self.keys.counter_key()))

"""Redis client mixin shared by the Redis-backed link DAO

Classes:
    - RedisClientMixin: builds (or adopts) a Redis client, namespaces keys and
      pings the server once at construction.

Example:
    >>> class LinkRedisDAO(RedisClientMixin, LinkBaseDAO):
    ...     pass
    ...
    >>> dao = LinkRedisDAO(redis_host='redis.internal', prefix='snowdrift:prod')
    >>> dao.keys.counter_key()
    'snowdrift:prod:id'
"""

from typing import Optional

import redis

from snowdrift.dao.redis.redis_key_schema import RedisKeySchema
from snowdrift.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Redis connection plumbing for link DAOs.

    Attributes:
        redis (redis.Redis):
            Client used by subclasses. Responses are decoded to str by default.
        keys (RedisKeySchema):
            Namespaced key names for digests, codes and the identifier counter.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Adopt redis_client, or connect with the given parameters

        Raises:
            DataStoreError:
                If the server doesn't answer PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self) -> None:
        """PING the server, raising DataStoreError if it is unreachable"""
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            info = self.redis.connection_pool.connection_kwargs
            location = f"{info.get('host')}:{info.get('port')}/{info.get('db')}"
            raise DataStoreError(f"Can't connect to Redis at {location}. Check the provided configuration parameters.") from e

from snowdrift.dao.redis.redis_key_schema import RedisKeySchema
from snowdrift.dao.redis.mixins import RedisClientMixin
from snowdrift.dao.redis.link_redis_dao import LinkRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'LinkRedisDAO',
]

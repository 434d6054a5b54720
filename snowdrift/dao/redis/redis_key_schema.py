import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the three link key spaces.

    An optional prefix can be provided to namespace all generated keys, so
    that independent deployments can share one Redis database,
    e.g. "snowdrift:prod" or "snowdrift:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def url_key(self, digest: str) -> str:
        return f'url:{digest}'

    @prefix_key
    def code_key(self, code: str) -> str:
        return f'code:{code}'

    @prefix_key
    def counter_key(self) -> str:
        return 'id'

import functools
from collections.abc import Callable


__all__ = ['S3KeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}/{key}' if self.prefix is not None else key

    return wrapper


class S3KeySchema:
    """Provide standardized S3 object keys for the link collections.

    Each key space is a separate "directory" of objects under an optional
    prefix, e.g. "snowdrift/prod/url/<digest>". Colons in the prefix are
    turned into slashes so the same app prefix works for Redis and S3.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix.replace(':', '/').strip('/') if prefix else None

    @prefix_key
    def url_key(self, digest: str) -> str:
        return f'url/{digest}'

    @prefix_key
    def code_key(self, code: str) -> str:
        return f'code/{code}'

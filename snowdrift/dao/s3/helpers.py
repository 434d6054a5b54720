import functools
from typing import TypeVar, Any
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from snowdrift.dao.exceptions import DataStoreError


__all__ = ['NOT_FOUND_CODES', 'WRITE_CONFLICT_CODES', 'client_error_code']

F = TypeVar('F', bound=Callable[..., Any])

NOT_FOUND_CODES = frozenset({'404', 'NoSuchKey', 'NotFound'})
# 412: key already exists; 409: a concurrent conditional write on the key won
WRITE_CONFLICT_CODES = frozenset({'412', 'PreconditionFailed', '409', 'ConditionalRequestConflict'})


def client_error_code(error: ClientError) -> str:
    """Return the S3 error code of a botocore ClientError ('' if absent)"""
    return str(error.response.get('Error', {}).get('Code', ''))


def handle_s3_client_error(method: F) -> F:
    """Wrap S3-interacting DAO methods to handle client errors

    Errors the DAO method did not handle itself (access denied, throttling,
    endpoint connection failures, ...) are raised as DataStoreError.

    Example:
        >>> @handle_s3_client_error
        ... def get_code(self, digest):
        ...     return self.s3.get_object(Bucket=self.bucket, Key=digest)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ClientError as e:
            raise DataStoreError(f"S3 request to bucket '{self.bucket}' failed ({client_error_code(e)}).") from e
        except BotoCoreError as e:
            raise DataStoreError(f"Can't reach S3 bucket '{self.bucket}'.") from e

    return wrapper

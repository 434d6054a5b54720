"""Helper utilities for AWS lambda functions.

Functions:
    get_short_url(code: str, url_prefix: str) -> str
        Get string representation of short URL for a given code
    guarantee_500_response(handler: Callable) -> Callable
        Decorator: Turn unhandled handler exceptions into HTTP 500 responses

Example:
    >>> from snowdrift.utils.helpers import get_short_url
    >>> get_short_url('bDx9', 'https://sn.ow/')
    'https://sn.ow/bDx9'
"""

import json
import logging
import functools
from collections.abc import Callable

from snowdrift.utils.runtime import running_locally
from snowdrift.utils.constants import UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def get_short_url(code: str, url_prefix: str) -> str:
    """Get string representation of shortened URL

    The prefix is prepended verbatim, so it should end with a separator.

    Args:
        code (str): link code
        url_prefix (str): configured short URL prefix, e.g. 'https://sn.ow/'

    Returns:
        str: short url string representation
    """
    return f'{url_prefix}{code}'


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 on any unhandled handler exception

    When running locally the exception is re-raised to ease debugging.
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper

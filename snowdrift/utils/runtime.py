"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.

Example:
    >>> from snowdrift.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
"""

import os

from snowdrift.utils.constants import APP_ENV_ENV


AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'


def running_locally() -> bool:
    """Check if the lambda is running locally (APP_ENV=local or sam local invoke)"""
    env = os.getenv(APP_ENV_ENV, '').lower()
    return env == 'local' or os.getenv(AWS_SAM_LOCAL_ENV) == 'true'

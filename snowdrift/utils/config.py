"""Utility functions for application configuration management.

Configuration is read from environment variables, so the same code runs under
AWS Lambda, SAM local and plain processes. Keys of every backend are
namespaced by the application prefix `<APP_NAME>:<APP_ENV>`, which lets
several deployments share one Redis database or S3 bucket.

Environment variables:
    APP_NAME, APP_ENV              – key namespace (APP_ENV defaults to 'local')
    SNOWDRIFT_BACKEND              – 'memory' (default), 'redis' or 's3'
    SNOWDRIFT_HASH_SALT            – codec salt (default 'salt')
    SNOWDRIFT_URL_PREFIX           – prefix prepended to codes to form short URLs
    SNOWDRIFT_ALLOWED_ORIGINS      – regex of CORS origins allowed (default: any)
    SNOWDRIFT_ROOT_REDIRECT        – redirect target for GET /
    REDIS_HOST, REDIS_PORT, REDIS_DB, REDIS_USERNAME, REDIS_PASSWORD
    S3_BUCKET                      – required by the 's3' backend
    AWS_REGION                     – region of the S3 bucket

Functions:
    app_env() -> str
    app_name() -> str | None
    app_prefix() -> str | None
    load_config() -> SnowdriftConfig
    build_dao(config: SnowdriftConfig) -> LinkBaseDAO
    build_engine(config: SnowdriftConfig, ...) -> LinkEngine
    load_engine() -> LinkEngine

Example:
    >>> os.environ['SNOWDRIFT_BACKEND'] = 'memory'
    >>> engine = build_engine(load_config())
    >>> link = engine.shorten('https://example.com')
    >>> engine.resolve(link.code).long_url
    'https://example.com'
"""

import os
import re
import logging
import functools
from dataclasses import dataclass, field
from typing import Any

from snowdrift.dao.base import LinkBaseDAO
from snowdrift.engine import ErrorReporter, LinkEngine
from snowdrift.exceptions import BadConfigurationError, MissingEnvironmentVariableError
from snowdrift.utils.codec import ShortcodeCodec
from snowdrift.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    BACKEND_ENV,
    HASH_SALT_ENV,
    URL_PREFIX_ENV,
    ALLOWED_ORIGINS_ENV,
    ROOT_REDIRECT_ENV,
    REDIS_HOST_ENV,
    REDIS_PORT_ENV,
    REDIS_DB_ENV,
    REDIS_USERNAME_ENV,
    REDIS_PASSWORD_ENV,
    S3_BUCKET_ENV,
    AWS_REGION_ENV,
    DEFAULT_HASH_SALT,
    DEFAULT_URL_PREFIX,
    MEMORY_BACKEND,
    REDIS_BACKEND,
    S3_BACKEND,
)


logger = logging.getLogger(__name__)

BACKENDS = frozenset({MEMORY_BACKEND, REDIS_BACKEND, S3_BACKEND})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME' (None if not set)"""
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'snowdrift'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'snowdrift:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class SnowdriftConfig:
    """Resolved application configuration.

    Attributes:
        backend (str):
            Storage backend name: 'memory', 'redis' or 's3'.
        hash_salt (str):
            Secret salt for code generation.
        url_prefix (str):
            Prefix prepended to codes to form absolute short URLs.
        prefix (str | None):
            Key namespace shared by all backends.
        allowed_origins (re.Pattern | None):
            CORS origins allowed to call the API. None allows any origin.
        root_redirect (str | None):
            Where GET / redirects to.
        redis (dict):
            Keyword arguments for RedisClientMixin.
        s3 (dict):
            Keyword arguments for S3ClientMixin (minus the prefix).
    """

    backend: str = MEMORY_BACKEND
    hash_salt: str = DEFAULT_HASH_SALT
    url_prefix: str = DEFAULT_URL_PREFIX
    prefix: str | None = None
    allowed_origins: re.Pattern | None = None
    root_redirect: str | None = None
    redis: dict[str, Any] = field(default_factory=dict)
    s3: dict[str, Any] = field(default_factory=dict)


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise BadConfigurationError(f"{name} must be an integer (given value: '{value}').") from e


def load_config() -> SnowdriftConfig:
    """Load the application configuration from environment variables

    Raises:
        BadConfigurationError:
            If the backend is unknown, SNOWDRIFT_ALLOWED_ORIGINS isn't a valid regex,
            or REDIS_PORT / REDIS_DB aren't integers.
    """
    backend = os.environ.get(BACKEND_ENV, MEMORY_BACKEND).lower()
    if backend not in BACKENDS:
        raise BadConfigurationError(f"Unknown storage backend '{backend}' (expected one of: {', '.join(sorted(BACKENDS))}).")

    allowed_origins = os.environ.get(ALLOWED_ORIGINS_ENV)
    try:
        allowed_origins = re.compile(allowed_origins) if allowed_origins else None
    except re.error as e:
        raise BadConfigurationError(f'Invalid {ALLOWED_ORIGINS_ENV} pattern: {e}') from e

    redis_config = {
        'redis_host': os.environ.get(REDIS_HOST_ENV, 'localhost'),
        'redis_port': _int_env(REDIS_PORT_ENV, 6379),
        'redis_db': _int_env(REDIS_DB_ENV, 0),
        'redis_username': os.environ.get(REDIS_USERNAME_ENV),
        'redis_password': os.environ.get(REDIS_PASSWORD_ENV),
    }
    s3_config = {
        's3_region': os.environ.get(AWS_REGION_ENV),
    }
    if os.environ.get(S3_BUCKET_ENV):
        s3_config['bucket'] = os.environ[S3_BUCKET_ENV]

    config = SnowdriftConfig(
        backend=backend,
        hash_salt=os.environ.get(HASH_SALT_ENV) or DEFAULT_HASH_SALT,
        url_prefix=os.environ.get(URL_PREFIX_ENV, DEFAULT_URL_PREFIX),
        prefix=app_prefix(),
        allowed_origins=allowed_origins,
        root_redirect=os.environ.get(ROOT_REDIRECT_ENV) or None,
        redis=redis_config,
        s3=s3_config,
    )
    logger.debug('Loaded configuration.', extra={'backend': backend, 'prefix': config.prefix})
    return config


def build_dao(config: SnowdriftConfig) -> LinkBaseDAO:
    """Construct the storage backend selected by the configuration

    The S3 backend takes its identifiers from a Redis counter under the same prefix.
    """
    # Imported here so that unused client libraries aren't loaded
    if config.backend == MEMORY_BACKEND:
        from snowdrift.dao.memory import LinkMemoryDAO

        return LinkMemoryDAO()

    from snowdrift.dao.redis import LinkRedisDAO

    if config.backend == REDIS_BACKEND:
        return LinkRedisDAO(**config.redis, prefix=config.prefix)

    if not config.s3.get('bucket'):
        raise MissingEnvironmentVariableError(f"Missing required environment variables: '{S3_BUCKET_ENV}'")

    from snowdrift.dao.s3 import LinkS3DAO

    id_allocator = LinkRedisDAO(**config.redis, prefix=config.prefix)
    return LinkS3DAO(id_allocator=id_allocator, **config.s3, prefix=config.prefix)


def build_engine(
    config: SnowdriftConfig,
    dao: LinkBaseDAO | None = None,
    report_error: ErrorReporter | None = None,
) -> LinkEngine:
    """Wire a LinkEngine from configuration (and an optional pre-built DAO)"""
    codec = ShortcodeCodec(salt=config.hash_salt)
    return LinkEngine(dao if dao is not None else build_dao(config), codec, report_error=report_error)


def _log_internal_error(error: Exception, request: Any) -> None:
    logger.error(
        'Internal error while handling request.',
        exc_info=error,
        extra={'errorKind': str(getattr(error, 'kind', '')), 'path': request.get('path') if isinstance(request, dict) else None},
    )


@functools.cache
def load_engine() -> LinkEngine:
    """Return the process-wide LinkEngine, built on first use

    Internal errors are reported to the log.
    """
    return build_engine(load_config(), report_error=_log_internal_error)

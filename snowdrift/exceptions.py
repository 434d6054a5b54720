"""Application-wide exception taxonomy

Every error raised by the link-resolution core derives from SnowdriftError and
carries an ErrorKind. Callers match errors by kind (or by class), never by identity.

Classes:
    ErrorKind:
        Enumeration of error kinds raised by the core.

    SnowdriftError:
        Base class for all application-specific errors.

    ValidationFailedError:
        Raised when a long URL is malformed or oversized.

    ConfigurationError:
        Base class for configuration errors.

    MissingEnvironmentVariableError:
        Raised when a required environment variable is missing.

    BadConfigurationError:
        Raised when the application is configured with invalid parameters.

Example:
    >>> from snowdrift.exceptions import ErrorKind, ValidationFailedError
    >>> try:
    ...     raise ValidationFailedError('URL too long')
    ... except SnowdriftError as e:
    ...     e.kind is ErrorKind.VALIDATION_FAILED
    True
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = 'not_found'
    DIGEST_EXISTS = 'digest_exists'
    CODE_EXISTS = 'code_exists'
    VALIDATION_FAILED = 'validation_failed'
    BACKEND_UNAVAILABLE = 'backend_unavailable'
    CONFIGURATION = 'configuration'


class SnowdriftError(Exception):
    """Base exception for all application-specific errors."""

    kind: ErrorKind = ErrorKind.BACKEND_UNAVAILABLE
    error_code = 'app:snowdrift_error'


class ValidationFailedError(SnowdriftError):
    """Raised when a long URL fails validation (oversized, relative or bad scheme)."""

    kind = ErrorKind.VALIDATION_FAILED
    error_code = 'app:validation_failed_error'


class ConfigurationError(SnowdriftError):
    """Base exception for all configuration errors."""

    kind = ErrorKind.CONFIGURATION
    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'

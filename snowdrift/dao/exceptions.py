"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkNotFoundError:
        Raised when a digest or code is not mapped in the data store.

    DigestExistsError:
        Raised when inserting a link whose URL digest is already mapped.

    CodeExistsError:
        Raised when inserting a link whose code is already mapped.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, etc.).

Example:
    >>> from snowdrift.dao.exceptions import LinkNotFoundError
    >>> raise LinkNotFoundError("Code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    snowdrift.dao.exceptions.LinkNotFoundError: Code 'abc123' not found.
"""

from snowdrift.exceptions import ErrorKind, SnowdriftError


class DAOError(SnowdriftError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class LinkNotFoundError(DAOError):
    """Exception raised when a digest or code is not found in the data store."""

    kind = ErrorKind.NOT_FOUND
    error_code = 'dao:link_not_found_error'


class DigestExistsError(DAOError):
    """Exception raised when the URL digest of a new link is already mapped to a code."""

    kind = ErrorKind.DIGEST_EXISTS
    error_code = 'dao:digest_exists_error'


class CodeExistsError(DAOError):
    """Exception raised when the code of a new link is already mapped to a URL."""

    kind = ErrorKind.CODE_EXISTS
    error_code = 'dao:code_exists_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, access denied, etc.
    The underlying client error is chained as __cause__.
    """

    kind = ErrorKind.BACKEND_UNAVAILABLE
    error_code = 'dao:data_store_error'

"""Link engine: shorten long URLs and resolve codes

The engine is stateless and safe for concurrent use. It never mutates storage
directly and never holds a lock across DAO calls; all concurrency control
lives inside the DAO.

Classes:
    LinkEngine:
        Orchestrates URL validation, digest lookup, identifier allocation,
        code encoding and link insertion.

Functions:
    validate_long_url(long_url: str) -> None
        Raise ValidationFailedError for oversized or non-http(s) URLs.

Example:
    >>> from snowdrift.engine import LinkEngine
    >>> from snowdrift.dao.memory import LinkMemoryDAO
    >>> from snowdrift.utils import ShortcodeCodec

    >>> engine = LinkEngine(LinkMemoryDAO(), ShortcodeCodec(salt='my_secret'))
    >>> link = engine.shorten('https://example.com/blog/article-123')
    >>> engine.resolve(link.code).long_url
    'https://example.com/blog/article-123'
"""

import logging
from typing import Any
from contextlib import contextmanager
from urllib.parse import urlsplit
from collections.abc import Callable, Iterator

from snowdrift.models import Flavor, LinkModel
from snowdrift.dao.base import LinkBaseDAO
from snowdrift.dao.exceptions import CodeExistsError, DataStoreError, DigestExistsError, LinkNotFoundError
from snowdrift.exceptions import ValidationFailedError
from snowdrift.utils.codec import ShortcodeCodec
from snowdrift.utils.digest import url_digest
from snowdrift.utils.constants import ALLOWED_URL_SCHEMES, MAX_URL_LENGTH


logger = logging.getLogger(__name__)

ErrorReporter = Callable[[Exception, Any], None]


def validate_long_url(long_url: str) -> None:
    """Validate a long URL before shortening it

    Raises:
        ValidationFailedError:
            If the URL is longer than MAX_URL_LENGTH characters, can't be parsed,
            or isn't an absolute http/https URL.
    """
    if not isinstance(long_url, str) or not long_url:
        raise ValidationFailedError('Long URL must be a non-empty string.')
    if len(long_url) > MAX_URL_LENGTH:
        raise ValidationFailedError(f'Long URL exceeds {MAX_URL_LENGTH} characters (given length: {len(long_url)}).')

    try:
        components = urlsplit(long_url)
    except ValueError as e:
        raise ValidationFailedError(f"Long URL can't be parsed: {e}") from e

    if components.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise ValidationFailedError(f"Long URL scheme must be http or https (given scheme: '{components.scheme}').")
    if not components.netloc:
        raise ValidationFailedError('Long URL must be absolute.')


class LinkEngine:
    """Answer "shorten" and "resolve" requests on top of a link DAO

    Attributes:
        dao (LinkBaseDAO):
            Storage backend.
        codec (ShortcodeCodec):
            Turns identifiers into codes.
        report_error (ErrorReporter | None):
            Optional callback invoked with (error, request) on internal failures.
    """

    def __init__(self, dao: LinkBaseDAO, codec: ShortcodeCodec, report_error: ErrorReporter | None = None):
        self.dao = dao
        self.codec = codec
        self.report_error = report_error

    def shorten(self, long_url: str, flavor: Flavor = Flavor.SHORT, request: Any = None) -> LinkModel:
        """Return the link for a long URL, creating it on first submission

        The first flavor ever requested for a URL wins: later calls return the
        stored code whatever flavor they ask for.

        Args:
            long_url (str):
                URL to shorten. Stored verbatim.
            flavor (Flavor):
                Code length policy used if the link has to be created.
            request (Any):
                Originating request, handed to report_error on internal failures.

        Returns:
            LinkModel: (long_url, code)

        Raises:
            ValidationFailedError:
                If the long URL is invalid.
            CodeExistsError:
                If the freshly generated code is already taken (codec collision).
            DataStoreError:
                If the storage backend fails.
        """
        validate_long_url(long_url)
        digest = url_digest(long_url)

        with self._reporting(request):
            try:
                return LinkModel(long_url=long_url, code=self.dao.get_code(digest))
            except LinkNotFoundError:
                pass

            identifier = self.dao.next_id()
            code = self.codec.encode(identifier, Flavor(flavor))
            try:
                self.dao.add(long_url, digest, code)
            except DigestExistsError:
                # A concurrent request created the link after our lookup
                logger.info('Lost race to shorten URL, returning existing link.', extra={'digest': digest})
                return LinkModel(long_url=long_url, code=self.dao.get_code(digest))
            except CodeExistsError:
                logger.error('Generated code already exists.', extra={'code': code, 'identifier': identifier})
                raise

        logger.info('Shortened long URL.', extra={'code': code, 'flavor': str(flavor)})
        return LinkModel(long_url=long_url, code=code)

    def resolve(self, code: str, request: Any = None) -> LinkModel:
        """Return the link a code points at

        Raises:
            LinkNotFoundError:
                If the code is unknown.
            DataStoreError:
                If the storage backend fails.
        """
        with self._reporting(request):
            long_url = self.dao.get_url(code)
        return LinkModel(long_url=long_url, code=code)

    @contextmanager
    def _reporting(self, request: Any) -> Iterator[None]:
        """Route internal errors to the error-reporting callback, then re-raise them"""
        try:
            yield
        except (CodeExistsError, DataStoreError) as e:
            if self.report_error is not None:
                try:
                    self.report_error(e, request)
                except Exception:
                    logger.exception('Error reporting callback failed.')
            raise

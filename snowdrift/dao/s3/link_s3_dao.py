"""Data Access Object (DAO) implementation for managing links in Amazon S3

Each key space is a separate collection of objects in one bucket:

    <prefix>/url/<digest>  -> code (text/plain)
    <prefix>/code/<code>   -> {"long_url": ..., "digest": ...} (application/json)

Uniqueness relies on S3 conditional writes: PutObject with IfNoneMatch='*'
only creates an object if the key is absent, and fails with 412 otherwise.
S3 has no counter primitive, so identifiers come from an injected IDAllocator
(e.g. a LinkRedisDAO).

Classes:
    LinkS3DAO:
        DAO for storing and retrieving links in an S3 bucket.

Example:
    >>> from snowdrift.dao.redis import LinkRedisDAO
    >>> from snowdrift.dao.s3 import LinkS3DAO

    >>> dao = LinkS3DAO(id_allocator=LinkRedisDAO(prefix='snowdrift:dev'), bucket='links', prefix='snowdrift:dev')
    >>> dao.add('https://example.com/page', 'f00d', 'bDx9')
    >>> dao.get_url('bDx9')
    'https://example.com/page'
"""

import json
import logging

from beartype import beartype
from botocore.exceptions import ClientError

from snowdrift.dao.base import IDAllocator, LinkBaseDAO
from snowdrift.dao.s3.mixins import S3ClientMixin
from snowdrift.dao.s3.helpers import (
    NOT_FOUND_CODES,
    WRITE_CONFLICT_CODES,
    client_error_code,
    handle_s3_client_error,
)
from snowdrift.dao.exceptions import CodeExistsError, DataStoreError, DigestExistsError, LinkNotFoundError


logger = logging.getLogger(__name__)


class LinkS3DAO(S3ClientMixin, LinkBaseDAO):
    """S3-based Data Access Object (DAO) for managing link mappings

    Attributes (see S3ClientMixin):
        s3 (BaseClient):
            boto3 S3 client.
        bucket (str):
            Bucket holding the link objects.
        keys (S3KeySchema):
            Key schema helper for generating namespaced object keys.
        ids (IDAllocator):
            Identifier source next_id() delegates to.
    """

    def __init__(self, id_allocator: IDAllocator, **kwargs):
        """Initialize an S3-based link DAO

        Args:
            id_allocator (IDAllocator):
                Companion identifier source (S3 has no atomic counter).
            **kwargs:
                S3 connection parameters, see S3ClientMixin.
        """
        if not isinstance(id_allocator, IDAllocator):
            raise TypeError(f'ID allocator must implement IDAllocator (given type: {type(id_allocator)}).')

        super().__init__(**kwargs)
        self.ids = id_allocator

    @handle_s3_client_error
    @beartype
    def add(self, long_url: str, digest: str, code: str, **kwargs) -> None:
        """Insert a link mapping into S3

        Objects are written in this order:
            1. HEAD the digest object (report DigestExistsError before CodeExistsError);
            2. create the code object (claims the code);
            3. create the digest object, which commits the link.

        A conditional write that fails with 412 (key exists) or 409 (a concurrent
        conditional write on the same key) counts as a lost race. If step 3 loses,
        the code object from step 2 is deleted again.
        get_url() ignores code objects whose digest object does not point back
        at them, so readers see both mappings or neither.

        Raises:
            DigestExistsError:
                If the digest is already mapped to a code.
            CodeExistsError:
                If the code is already mapped to a long URL.
            DataStoreError:
                On any other S3 error, or if a stored link object is malformed.
        """
        url_key = self.keys.url_key(digest)
        code_key = self.keys.code_key(code)

        if self._exists(url_key):
            raise DigestExistsError(f"URL with digest '{digest}' already exists.")

        payload = json.dumps({'long_url': long_url, 'digest': digest})
        if not self._put_if_absent(code_key, payload, content_type='application/json'):
            raise CodeExistsError(f"Link with code '{code}' already exists.")

        if not self._put_if_absent(url_key, code, content_type='text/plain'):
            logger.debug('Lost race on digest, releasing claimed code.', extra={'digest': digest, 'code': code})
            self.s3.delete_object(Bucket=self.bucket, Key=code_key)
            raise DigestExistsError(f"URL with digest '{digest}' already exists.")

    @handle_s3_client_error
    @beartype
    def get_code(self, digest: str, **kwargs) -> str:
        code = self._read(self.keys.url_key(digest))
        if code is None:
            raise LinkNotFoundError(f"URL with digest '{digest}' not found.")
        return code

    @handle_s3_client_error
    @beartype
    def get_url(self, code: str, **kwargs) -> str:
        body = self._read(self.keys.code_key(code))
        if body is None:
            raise LinkNotFoundError(f"Link with code '{code}' not found.")

        try:
            record = json.loads(body)
            digest, long_url = record['digest'], record['long_url']
        except (ValueError, KeyError, TypeError) as e:
            raise DataStoreError(f"Malformed link object for code '{code}' in bucket '{self.bucket}'.") from e

        # Uncommitted or rolled back code objects are invisible
        if self._read(self.keys.url_key(digest)) != code:
            raise LinkNotFoundError(f"Link with code '{code}' not found.")
        return long_url

    @beartype
    def next_id(self, **kwargs) -> int:
        return self.ids.next_id(**kwargs)

    def _exists(self, key: str) -> bool:
        try:
            self.s3.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if client_error_code(e) in NOT_FOUND_CODES:
                return False
            raise
        return True

    def _read(self, key: str) -> str | None:
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if client_error_code(e) in NOT_FOUND_CODES:
                return None
            raise
        return response['Body'].read().decode('utf-8')

    def _put_if_absent(self, key: str, body: str, content_type: str) -> bool:
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body.encode('utf-8'),
                ContentType=content_type,
                IfNoneMatch='*',
            )
        except ClientError as e:
            if client_error_code(e) in WRITE_CONFLICT_CODES:
                return False
            raise
        return True

"""Unit tests for S3KeySchema."""

import pytest

from snowdrift.dao.s3 import S3KeySchema


def test_keys_with_app_prefix():
    """Colon separated app prefixes become object key "directories"."""
    keys = S3KeySchema(prefix='snowdrift:prod')

    assert keys.prefix == 'snowdrift/prod'
    assert keys.url_key('f00d') == 'snowdrift/prod/url/f00d'
    assert keys.code_key('abc123') == 'snowdrift/prod/code/abc123'


def test_keys_without_prefix():
    keys = S3KeySchema()

    assert keys.url_key('f00d') == 'url/f00d'
    assert keys.code_key('abc123') == 'code/abc123'


def test_prefix_slashes_are_trimmed():
    assert S3KeySchema(prefix='/links/').url_key('f00d') == 'links/url/f00d'


def test_invalid_prefix_type():
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        S3KeySchema(prefix=42)

"""URL digest used as the deduplication key for long URLs

Functions:
    url_digest(long_url: str) -> str
        Fixed-length fingerprint of a long URL.

Example:
    >>> from snowdrift.utils import url_digest
    >>> len(url_digest('https://example.com'))
    64
"""

import hashlib


# 256 bits out of SHA-512
DIGEST_BYTES = 32


def url_digest(long_url: str) -> str:
    """Return the hex encoded, truncated SHA-512 digest of a long URL

    Args:
        long_url (str): URL exactly as submitted by the client.

    Returns:
        str: 64 hex characters.
    """
    return hashlib.sha512(long_url.encode('utf-8')).digest()[:DIGEST_BYTES].hex()

"""Abstract base classes for link data access objects (DAOs).

This module establishes a consistent contract for all link DAO implementations,
regardless of the underlying storage mechanism (in-memory, Redis, S3).

Responsibilities:
    - Provide an interface for inserting links and resolving digests and codes.
    - Provide an interface for allocating monotonic link identifiers.
    - Standardize error handling across multiple data store implementations.

Classes:
    IDAllocator:
        Source of unique, strictly increasing link identifiers.

    LinkBaseDAO:
        Interface for link DAOs. Extends IDAllocator.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from snowdrift.dao.memory import LinkMemoryDAO
        >>> from snowdrift.utils import url_digest

        >>> dao = LinkMemoryDAO()
        >>> digest = url_digest('https://example.com/blog/article-123')
        >>> dao.add('https://example.com/blog/article-123', digest, 'bDx9')

        >>> dao.get_code(digest)
        'bDx9'
        >>> dao.get_url('bDx9')
        'https://example.com/blog/article-123'
        >>> dao.next_id()
        1
"""

from abc import ABC, abstractmethod


class IDAllocator(ABC):
    """Source of link identifiers.

    Methods:
        next_id(**kwargs) -> int:
            Return the next value of a monotonic counter.
            Never returns the same value twice, even across concurrent callers.
            Raises DataStoreError on connection failure.
    """

    @abstractmethod
    def next_id(self, **kwargs) -> int:
        """Allocate the next link identifier.

        Returns:
            int: A positive integer, greater than every value returned before.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass


class LinkBaseDAO(IDAllocator):
    """Interface for link data access objects (DAOs).

    A DAO owns three independent key spaces: digest -> code, code -> long URL,
    and the identifier counter. Both mappings are first-writer-wins and are
    never updated or deleted.

    Methods:
        add(long_url: str, digest: str, code: str, **kwargs) -> None:
            Record digest -> code and code -> long_url atomically.
            Raises DigestExistsError if the digest is already mapped (checked first).
            Raises CodeExistsError if the code is already mapped.
            Raises DataStoreError on connection or write failure.

        get_code(digest: str, **kwargs) -> str:
            Return the code mapped to a URL digest.
            Raises LinkNotFoundError if the digest is not mapped.
            Raises DataStoreError on connection or read failure.

        get_url(code: str, **kwargs) -> str:
            Return the long URL mapped to a code.
            Raises LinkNotFoundError if the code is not mapped.
            Raises DataStoreError on connection or read failure.

        next_id(**kwargs) -> int:
            See IDAllocator.

    Subclassing:
        Datastore-specific implementations (e.g., LinkRedisDAO or LinkS3DAO)
        must extend this class and implement all abstract methods. Readers must
        never observe only one of the two mappings written by add().
    """

    @abstractmethod
    def add(self, long_url: str, digest: str, code: str, **kwargs) -> None:
        """Insert a new link into the data store.

        Args:
            long_url (str):
                The original long URL.

            digest (str):
                Fingerprint of long_url (see snowdrift.utils.url_digest).

            code (str):
                Code the link resolves by.

            **kwargs:
                Additional keyword arguments, used by data store.

        Raises:
            DigestExistsError:
                If the digest is already mapped to a code.

            CodeExistsError:
                If the code is already mapped to a long URL.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_code(self, digest: str, **kwargs) -> str:
        """Retrieve the code of a long URL by its digest.

        Raises:
            LinkNotFoundError:
                If the digest is not mapped.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_url(self, code: str, **kwargs) -> str:
        """Retrieve the long URL a code resolves to.

        Raises:
            LinkNotFoundError:
                If the code is not mapped.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

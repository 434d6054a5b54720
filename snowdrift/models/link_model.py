from dataclasses import dataclass
from enum import StrEnum


class Flavor(StrEnum):
    """Code length policy chosen when a link is first created.

    SHORT:
        Default, shortest possible code for the identifier.
    LONG:
        Obscure code padded to a minimum length, harder to guess.
    """

    SHORT = 'short'
    LONG = 'long'

    @classmethod
    def from_obscure(cls, obscure: bool | None) -> 'Flavor':
        """Resolve the optional "obscure" request flag into a flavor.

        Example:
            >>> Flavor.from_obscure(None)
            <Flavor.SHORT: 'short'>
            >>> Flavor.from_obscure(True)
            <Flavor.LONG: 'long'>
        """
        return cls.LONG if obscure else cls.SHORT


@dataclass(frozen=True)
class LinkModel:
    """Represent a shortened URL mapping.

    Attributes:
        long_url (str):
            The original long URL that the code resolves to.
        code (str):
            The unique short identifier of the link.

    Example:
        >>> link = LinkModel(long_url='https://example.com/article/123', code='bDx9')
        >>> link.long_url
        'https://example.com/article/123'
        >>> link.code
        'bDx9'
    """

    long_url: str
    code: str

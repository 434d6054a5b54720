"""Shortcode encoding utilities

This module turns numeric link identifiers into short, deterministic,
non-sequential Base62 codes (and back) using a secret salt value.

Functions:
    generate_shortcode(counter, salt='salt', length=4, mult=1315423911):
        Encode a counter into a Base62 code of at least `length` characters.

    decode_shortcode(code, salt='salt', length=4, mult=1315423911):
        Recover the counter a code was generated from.

Classes:
    ShortcodeCodec:
        Salted codec holding the minimum code length of each link flavor.

Example:
    >>> from snowdrift.utils import generate_shortcode, ShortcodeCodec
    >>> generate_shortcode(123, salt='unit_test_salt', length=7)
    'XrJQsJI'
    >>> codec = ShortcodeCodec(salt='my_secret')
    >>> len(codec.encode(1, Flavor.LONG))
    12
"""

import math
import string

import xxhash

from snowdrift.models import Flavor
from snowdrift.utils.constants import (
    DEFAULT_HASH_SALT,
    SHORT_CODE_MIN_LENGTH,
    LONG_CODE_MIN_LENGTH,
    CODE_PERMUTATION_MULTIPLIER,
)


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits
INDEX = {char: i for i, char in enumerate(ALPHABET)}


def _base62_width(number: int) -> int:
    width = 1
    while number >= BASE**width:
        width += 1
    return width


def _validate_parameters(salt: str, length: int, mult: int) -> None:
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if not isinstance(length, int) or length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    # Coprime with BASE means coprime with every BASE**length
    if math.gcd(mult, BASE) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with {BASE} (given value: mult={mult}).')


def generate_shortcode(
    counter: int,
    salt: str = DEFAULT_HASH_SALT,
    length: int = SHORT_CODE_MIN_LENGTH,
    mult: int = CODE_PERMUTATION_MULTIPLIER,
) -> str:
    """Generate a short, deterministic code from a counter and salt.

    The counter is encoded into a Base62 string (using a-z, A-Z, 0-9) after an
    affine permutation over the space BASE^L, where L is the larger of `length`
    and the number of Base62 digits the counter needs. The permutation is a
    bijection within one L, and codes of different lengths never compare equal,
    so distinct counters always produce distinct codes.

    Args:
        counter (int):
            Unique non-negative integer identifying the link.

        salt (str, optional):
            Secret string used to randomize the output space.
            Defaults to "salt". Highly recommended to set a custom salt.

        length (int, optional):
            Minimum length of the resulting code. Defaults to 4.

        mult (int, optional):
            Multiplicative factor for the permutation.
            Must be coprime with BASE (62).

    Returns:
        str: An alphanumeric code of at least `length` characters.

    Example:
        >>> generate_shortcode(12345, salt='my_secret', length=7)
        'Gh71WPT'

    NOTE:
        - The output is not trivially predictable without knowledge of the salt
          and permutation parameters (this is obfuscation, not encryption).
        - Uses xxhash for hashing the salt.
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    _validate_parameters(salt, length, mult)

    width = max(length, _base62_width(counter))
    modulo_space = BASE**width
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space

    # Most significant digit first, padded with ALPHABET[0] up to `width`
    return ''.join(reversed([ALPHABET[(permuted // BASE**i) % BASE] for i in range(width)])).rjust(width, ALPHABET[0])


def decode_shortcode(
    code: str,
    salt: str = DEFAULT_HASH_SALT,
    length: int = SHORT_CODE_MIN_LENGTH,
    mult: int = CODE_PERMUTATION_MULTIPLIER,
) -> int:
    """Recover the counter a code was generated from.

    Args:
        code (str): Code produced by generate_shortcode().
        salt (str, optional): Salt used at generation time.
        length (int, optional): Minimum length used at generation time.
        mult (int, optional): Multiplicative factor used at generation time.

    Returns:
        int: The original counter.

    Raises:
        ValueError:
            If the code contains characters outside the alphabet, or could not
            have been produced with these parameters.

    Example:
        >>> decode_shortcode('XrJQsJI', salt='unit_test_salt', length=7)
        123
    """
    _validate_parameters(salt, length, mult)
    if not code or len(code) < length or any(char not in INDEX for char in code):
        raise ValueError(f"Malformed code '{code}'.")

    width = len(code)
    modulo_space = BASE**width
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = 0
    for char in code:
        permuted = permuted * BASE + INDEX[char]
    counter = ((permuted - salt_hash) * pow(mult, -1, modulo_space)) % modulo_space

    # Only canonical widths are ever generated
    if max(length, _base62_width(counter)) != width:
        raise ValueError(f"Code '{code}' was not generated with these parameters.")
    return counter


class ShortcodeCodec:
    """Salted codec turning link identifiers into codes of a given flavor.

    Both flavors share one identifier space; the LONG (obscure) flavor pads
    codes to a larger minimum length.
    """

    def __init__(
        self,
        salt: str = DEFAULT_HASH_SALT,
        short_length: int = SHORT_CODE_MIN_LENGTH,
        long_length: int = LONG_CODE_MIN_LENGTH,
        mult: int = CODE_PERMUTATION_MULTIPLIER,
    ):
        _validate_parameters(salt, short_length, mult)
        _validate_parameters(salt, long_length, mult)
        if long_length <= short_length:
            raise ValueError(f'Long code length must exceed short code length ({long_length} <= {short_length}).')

        self.salt = salt
        self.mult = mult
        self.lengths = {Flavor.SHORT: short_length, Flavor.LONG: long_length}

    def encode(self, identifier: int, flavor: Flavor = Flavor.SHORT) -> str:
        if not isinstance(identifier, int) or isinstance(identifier, bool):
            raise TypeError(f'Identifier must be of type integer (given type: {type(identifier)}).')
        if identifier < 1:
            raise ValueError(f'Identifier must be a positive integer (given value: {identifier}).')
        return generate_shortcode(identifier, salt=self.salt, length=self.lengths[Flavor(flavor)], mult=self.mult)

    def decode(self, code: str, flavor: Flavor = Flavor.SHORT) -> int:
        return decode_shortcode(code, salt=self.salt, length=self.lengths[Flavor(flavor)], mult=self.mult)

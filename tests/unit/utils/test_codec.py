"""Unit tests for the shortcode codec in codec.py.

Test coverage includes:

1. Basic functionality and regression
   - Known input and salt combinations produce stable, expected output.

2. Determinism and salt variation

3. Length enforcement and growth
   - Codes are at least `length` characters and grow past BASE**length.

4. Uniqueness
   - Distinct counters never share a code, including across width changes.

5. Decoding
   - decode_shortcode() inverts generate_shortcode().
   - Malformed and non-canonical codes raise ValueError.

6. Error handling

7. ShortcodeCodec flavors
"""

import string

import pytest

from snowdrift.models import Flavor
from snowdrift.utils import ShortcodeCodec, decode_shortcode, generate_shortcode


# -------------------------------
# 1. Basic functionality and regression
# -------------------------------


def test_generate_shortcode_returns_string():
    result = generate_shortcode(123, salt='unit_test_salt', length=7)
    assert isinstance(result, str)
    assert len(result) == 7
    assert result == 'XrJQsJI'


def test_known_output_regression():
    """Ensure stable output for known inputs (detect logic drift)."""
    assert generate_shortcode(12345, salt='my_secret', length=7) == 'Gh71WPT'


# -------------------------------
# 2. Determinism and salt variation
# -------------------------------


def test_generate_shortcode_is_deterministic():
    assert generate_shortcode(123, salt='unit_test_salt', length=7) == generate_shortcode(123, salt='unit_test_salt', length=7)


def test_different_salts_produce_different_codes():
    result1 = generate_shortcode(123, salt='unit_test_saltA', length=7)
    result2 = generate_shortcode(123, salt='unit_test_saltB', length=7)
    assert result1 != result2
    assert result1 == 'Nr5bkci'
    assert result2 == 'q7femOj'


# -------------------------------
# 3. Length enforcement and growth
# -------------------------------


def test_default_length_is_four():
    assert len(generate_shortcode(1, salt='length_test')) == 4


def test_respects_minimum_length():
    assert len(generate_shortcode(12345, salt='length_test', length=10)) == 10


@pytest.mark.parametrize(
    'counter, expected_length',
    [
        (62**4 - 1, 4),
        (62**4, 5),
        (62**5, 6),
        (2**63 - 1, 11),
    ],
)
def test_codes_grow_past_the_minimum_length(counter, expected_length):
    assert len(generate_shortcode(counter, salt='edge_test')) == expected_length


def test_output_is_base62_safe():
    alphabet = set(string.ascii_letters + string.digits)
    assert all(character in alphabet for character in generate_shortcode(123, salt='format_test'))


# -------------------------------
# 4. Uniqueness
# -------------------------------


def test_codes_are_unique_for_small_counters():
    codes = {generate_shortcode(i, salt='unique_test') for i in range(20000)}
    assert len(codes) == 20000


def test_codes_are_unique_around_width_change():
    counters = range(62**4 - 500, 62**4 + 500)
    codes = {generate_shortcode(i, salt='unique_test') for i in counters}
    assert len(codes) == len(counters)


# -------------------------------
# 5. Decoding
# -------------------------------


def test_decode_regression():
    assert decode_shortcode('XrJQsJI', salt='unit_test_salt', length=7) == 123


@pytest.mark.parametrize('counter', [0, 1, 42, 62**4 - 1, 62**4, 62**6 + 17, 2**63 - 1])
def test_decode_inverts_generate(counter):
    code = generate_shortcode(counter, salt='decode_test')
    assert decode_shortcode(code, salt='decode_test') == counter


@pytest.mark.parametrize('code', ['', 'abc', 'ab-d', 'abcd!'])
def test_decode_malformed_code(code):
    with pytest.raises(ValueError, match='Malformed code'):
        decode_shortcode(code, salt='decode_test')


def test_decode_non_canonical_code():
    """A code padded past the width its counter needs was never generated."""
    padded = generate_shortcode(5, salt='decode_test', length=5)

    with pytest.raises(ValueError, match='was not generated with these parameters'):
        decode_shortcode(padded, salt='decode_test', length=4)


# -------------------------------
# 6. Error handling
# -------------------------------


@pytest.mark.parametrize('counter', [None, 'abc', 12.34, True])
def test_invalid_counter_type_raises_error(counter):
    with pytest.raises(TypeError):
        generate_shortcode(counter, salt='unit_test_salt')


def test_negative_counter_raises_error():
    with pytest.raises(ValueError):
        generate_shortcode(-1, salt='unit_test_salt')


@pytest.mark.parametrize('salt', [None, 1, 12.34])
def test_invalid_salt_type_raises_error(salt):
    with pytest.raises(TypeError):
        generate_shortcode(100, salt=salt)


def test_empty_salt_raises_error():
    with pytest.raises(ValueError):
        generate_shortcode(100, salt='')


@pytest.mark.parametrize('length', [0, -3, 'four'])
def test_invalid_length_raises_error(length):
    with pytest.raises(ValueError):
        generate_shortcode(100, salt='unit_test_salt', length=length)


def test_multiplier_sharing_factor_with_base_raises_error():
    with pytest.raises(ValueError, match='coprime'):
        generate_shortcode(100, salt='unit_test_salt', mult=31)


# -------------------------------
# 7. ShortcodeCodec flavors
# -------------------------------


@pytest.fixture
def codec():
    return ShortcodeCodec(salt='codec_test')


def test_codec_flavor_lengths(codec):
    assert len(codec.encode(1, Flavor.SHORT)) == 4
    assert len(codec.encode(1, Flavor.LONG)) == 12


def test_codec_flavors_share_identifier_space(codec):
    assert codec.decode(codec.encode(99, Flavor.SHORT), Flavor.SHORT) == 99
    assert codec.decode(codec.encode(99, Flavor.LONG), Flavor.LONG) == 99
    assert codec.encode(99, Flavor.SHORT) != codec.encode(99, Flavor.LONG)


def test_codec_accepts_flavor_values(codec):
    assert codec.encode(7, 'long') == codec.encode(7, Flavor.LONG)


@pytest.mark.parametrize('identifier', [0, -1])
def test_codec_rejects_non_positive_identifiers(codec, identifier):
    with pytest.raises(ValueError):
        codec.encode(identifier)


@pytest.mark.parametrize('identifier', [None, '1', 1.0, False])
def test_codec_rejects_non_integer_identifiers(codec, identifier):
    with pytest.raises(TypeError):
        codec.encode(identifier)


def test_codec_requires_long_length_above_short_length():
    with pytest.raises(ValueError, match='Long code length must exceed short code length'):
        ShortcodeCodec(salt='codec_test', short_length=8, long_length=8)

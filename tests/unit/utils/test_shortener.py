"""Unit tests for the generate_shortcode function in shortener.py.

This test suite verifies the correctness, consistency, and robustness
of the generate_shortcode() helper function that derives Base62 short codes
from a SHA-256 digest of the URL, the owner and a nanosecond timestamp.

Test coverage includes:

1. Basic functionality
   - Ensures the function returns a string of the expected length.

2. Determinism
   - Same URL, owner and timestamp must always produce identical output.

3. Input variation
   - Changing the owner or the timestamp changes the result.

4. Long codes
   - Codes longer than the 64-bit integer provides keep the exact length.

5. Error handling
   - Ensures invalid inputs raise appropriate exceptions.

6. Output format
   - All characters must belong to the Base62 alphabet.

7. ShortcodeGenerator
   - Binds the configured length and salts every call with the current time.
"""

import string
from uuid import uuid4

import pytest

from linkshortener.utils import generate_shortcode, ShortcodeGenerator
from linkshortener.utils.shortener import ALPHABET, BASE


URL = 'https://example.com/some/long/path?with=query'


# -------------------------------
# 1. Basic functionality and type
# -------------------------------


def test_generate_shortcode_returns_string():
    """Ensure generate_shortcode() returns a string of the expected length."""
    result = generate_shortcode(URL, uuid4(), length=7, timestamp_ns=1)
    assert isinstance(result, str)
    assert len(result) == 7


def test_generate_shortcode_default_length():
    assert len(generate_shortcode(URL, uuid4())) == 6


# -------------------------------
# 2. Determinism
# -------------------------------


def test_generate_shortcode_is_deterministic():
    """Same URL + owner + timestamp should always produce the same code."""
    owner_id = uuid4()
    result1 = generate_shortcode(URL, owner_id, timestamp_ns=1_700_000_000_000_000_000)
    result2 = generate_shortcode(URL, owner_id, timestamp_ns=1_700_000_000_000_000_000)
    assert result1 == result2


def test_uuid_and_string_owner_ids_are_equivalent():
    owner_id = uuid4()
    assert generate_shortcode(URL, owner_id, timestamp_ns=7) == generate_shortcode(URL, str(owner_id), timestamp_ns=7)


def test_shorter_code_is_prefix_of_longer_code():
    """Digits are emitted least significant first, so length only truncates."""
    owner_id = uuid4()
    short = generate_shortcode(URL, owner_id, length=4, timestamp_ns=99)
    long = generate_shortcode(URL, owner_id, length=10, timestamp_ns=99)
    assert long.startswith(short)


# -------------------------------
# 3. Input variation
# -------------------------------


def test_different_owners_produce_different_codes():
    codes = {generate_shortcode(URL, uuid4(), timestamp_ns=42) for _ in range(50)}
    assert len(codes) == 50


def test_different_timestamps_produce_different_codes():
    owner_id = uuid4()
    codes = {generate_shortcode(URL, owner_id, timestamp_ns=ts) for ts in range(1000)}
    assert len(codes) == 1000


# -------------------------------
# 4. Long codes
# -------------------------------


@pytest.mark.parametrize('length', [11, 12, 20, 32, 64])
def test_generate_long_shortcode(length):
    """Lengths beyond the 64-bit integer's Base62 digits fall back to digest bytes."""
    result = generate_shortcode(URL, uuid4(), length=length, timestamp_ns=5)
    assert len(result) == length


# -------------------------------
# 5. Error handling
# -------------------------------


@pytest.mark.parametrize(
    'target, owner_id, length, error',
    [
        (None, 'owner', 6, TypeError),
        (b'https://example.com', 'owner', 6, TypeError),
        (URL, 123, 6, TypeError),
        (URL, None, 6, TypeError),
        (URL, 'owner', '6', TypeError),
        (URL, 'owner', 6.0, TypeError),
        (URL, 'owner', True, TypeError),
        (URL, 'owner', 0, ValueError),
        (URL, 'owner', -1, ValueError),
    ],
)
def test_generate_shortcode_invalid_inputs(target, owner_id, length, error):
    with pytest.raises(error):
        generate_shortcode(target, owner_id, length=length)


# -------------------------------
# 6. Output format
# -------------------------------


def test_alphabet_is_base62():
    assert BASE == 62
    assert set(ALPHABET) == set(string.ascii_letters + string.digits)
    assert len(set(ALPHABET)) == 62


def test_generate_shortcode_output_is_base62():
    allowed = set(ALPHABET)
    owner_id = uuid4()
    for ts in range(200):
        result = generate_shortcode(URL, owner_id, length=16, timestamp_ns=ts)
        assert set(result) <= allowed


# -------------------------------
# 7. ShortcodeGenerator
# -------------------------------


def test_shortcode_generator_uses_configured_length():
    generator = ShortcodeGenerator(length=9)
    assert generator.length == 9
    assert len(generator.generate(URL, uuid4())) == 9


def test_shortcode_generator_produces_distinct_codes_over_time():
    generator = ShortcodeGenerator()
    owner_id = uuid4()
    codes = {generator.generate(URL, owner_id) for _ in range(1000)}
    # time_ns() may repeat on coarse clocks, collisions are tolerated but rare
    assert len(codes) > 990


@pytest.mark.parametrize('length, error', [(0, ValueError), (-5, ValueError), ('6', TypeError), (False, TypeError)])
def test_shortcode_generator_invalid_length(length, error):
    with pytest.raises(error):
        ShortcodeGenerator(length=length)

from eth_utils import (
    ValidationError,
)
import pytest

from sharding.constants import (
    SECPK1_N,
    UINT_256_MAX,
)
from sharding.validation import (
    validate_canonical_address,
    validate_gte,
    validate_is_bytes,
    validate_is_integer,
    validate_length,
    validate_lt_secpk1n,
    validate_lte,
    validate_uint256,
    validate_word,
)


@pytest.mark.parametrize(
    "validator,value,is_valid",
    (
        (validate_is_bytes, b"", True),
        (validate_is_bytes, bytearray(b"abc"), False),
        (validate_is_bytes, "abc", False),
        (validate_is_integer, 0, True),
        (validate_is_integer, True, False),
        (validate_is_integer, 1.0, False),
        (validate_uint256, 0, True),
        (validate_uint256, UINT_256_MAX, True),
        (validate_uint256, UINT_256_MAX + 1, False),
        (validate_uint256, -1, False),
        (validate_canonical_address, b"\x00" * 20, True),
        (validate_canonical_address, b"\x00" * 21, False),
        (validate_canonical_address, "0x" + "00" * 20, False),
        (validate_word, b"\x00" * 32, True),
        (validate_word, b"\x00" * 31, False),
        (validate_word, "\x00" * 32, False),
        (validate_lt_secpk1n, SECPK1_N - 1, True),
        (validate_lt_secpk1n, SECPK1_N, False),
    ),
)
def test_validators(validator, value, is_valid):
    if is_valid:
        validator(value)
    else:
        with pytest.raises(ValidationError):
            validator(value)


def test_bounds():
    validate_gte(1, minimum=1)
    validate_lte(1, maximum=1)
    with pytest.raises(ValidationError):
        validate_gte(0, minimum=1)
    with pytest.raises(ValidationError):
        validate_lte(2, maximum=1)
    with pytest.raises(ValidationError):
        validate_gte("1", minimum=1)


def test_length():
    validate_length(b"\x00" * 65, 65)
    with pytest.raises(ValidationError):
        validate_length(b"\x00" * 64, 65)

from eth_typing import (
    Address,
    Hash32,
)

#
# Collation body
#
MAX_COLLATION_BODY_SIZE = 2**20

#
# Body chunking
#
CHUNK_SIZE = 32
INDICATOR_SIZE = 1
CHUNK_DATA_SIZE = CHUNK_SIZE - INDICATOR_SIZE

#
# Indicator byte layout
#
DATA_LENGTH_BITS = 0b00011111
RESERVED_BITS = 0b01100000
SKIP_EVM_FLAG = 0b10000000

#
# Empty values
#
ZERO_ADDRESS = Address(20 * b"\x00")
ZERO_HASH32 = Hash32(32 * b"\x00")
BLANK_ROOT_HASH = Hash32(
    b"V\xe8\x1f\x17\x1b\xccU\xa6\xff\x83E\xe6\x92\xc0\xf8n\x5bH\xe0\x1b\x99l\xad\xc0\x01b/\xb5\xe3c\xb4!"  # noqa: E501
)
EMPTY_SIGNATURE = b""

#
# Signatures
#
SIGNATURE_SIZE = 65
SECPK1_N = 115792089237316195423570985008687907852837564279074904382605163141518161494337
UINT_256_MAX = 2**256 - 1

from rlp.sedes import (
    Binary,
    List,
    big_endian_int,
    binary,
)

address = Binary.fixed_length(20, allow_empty=True)
hash32 = Binary.fixed_length(32)
canonical_address = Binary.fixed_length(20)

# Codec-local shape of one transaction inside a collation body. It does not
# follow the transaction class's own encoding.
raw_transaction_record = List([
    big_endian_int,  # nonce
    big_endian_int,  # gas_price
    big_endian_int,  # gas
    address,  # to
    big_endian_int,  # value
    binary,  # data
    big_endian_int,  # v
    big_endian_int,  # r
    big_endian_int,  # s
])

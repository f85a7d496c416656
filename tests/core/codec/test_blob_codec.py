from eth_utils import (
    ValidationError,
)
from hypothesis import (
    given,
    settings,
    strategies as st,
)
import pytest

from sharding._utils.blobs import (
    get_serialized_size,
)
from sharding.codec import (
    BlobCodec,
)
from sharding.constants import (
    CHUNK_SIZE,
    MAX_COLLATION_BODY_SIZE,
    SKIP_EVM_FLAG,
)
from sharding.exceptions import (
    DecodingError,
    EncodingError,
    SizeLimitExceeded,
)
from sharding.rlp.transactions import (
    ShardTransaction,
    UnsignedShardTransaction,
)


uint256 = st.integers(min_value=0, max_value=2**256 - 1)

transaction_strategy = st.builds(
    ShardTransaction,
    nonce=st.integers(min_value=0, max_value=2**64 - 1),
    gas_price=uint256,
    gas=uint256,
    to=st.one_of(st.just(b""), st.binary(min_size=20, max_size=20)),
    value=uint256,
    data=st.binary(max_size=256),
    v=st.integers(min_value=27, max_value=28),
    r=uint256,
    s=uint256,
)


def test_codec_round_trip(transactions):
    body = BlobCodec.encode(transactions)
    assert BlobCodec.decode(body) == transactions


@settings(max_examples=50)
@given(st.lists(transaction_strategy, max_size=8))
def test_codec_round_trip_property(transaction_list):
    body = BlobCodec.encode(transaction_list)

    assert len(body) % CHUNK_SIZE == 0
    assert BlobCodec.decode(body) == tuple(transaction_list)


def test_empty_transaction_list():
    assert BlobCodec.encode(()) == b""
    assert BlobCodec.decode(b"") == ()


def test_body_size_is_sum_of_raw_record_sizes(transactions):
    raw_blobs = BlobCodec.to_raw_blobs(transactions)
    record_sizes = [get_serialized_size(len(raw_blob.data)) for raw_blob in raw_blobs]

    assert len(raw_blobs) == 3
    assert len(BlobCodec.encode(transactions)) == sum(record_sizes)


def test_raw_records_are_independent_of_transaction_encoding(transactions):
    raw_blobs = BlobCodec.to_raw_blobs(transactions)
    assert BlobCodec.from_raw_blobs(raw_blobs) == transactions


def test_size_limit_applies_to_whole_body(make_transaction):
    transaction = make_transaction(0, data=b"\x01" * (MAX_COLLATION_BODY_SIZE // 2))

    body = BlobCodec.encode([transaction])
    assert len(body) <= MAX_COLLATION_BODY_SIZE

    with pytest.raises(SizeLimitExceeded) as excinfo:
        BlobCodec.encode([transaction, transaction])

    assert excinfo.value.body_size > MAX_COLLATION_BODY_SIZE
    assert excinfo.value.max_body_size == MAX_COLLATION_BODY_SIZE


def test_configured_size_limit(transactions):
    body = BlobCodec.encode(transactions)

    ExactCodec = BlobCodec.configure(max_body_size=len(body))
    assert ExactCodec.encode(transactions) == body

    SmallCodec = BlobCodec.configure(max_body_size=len(body) - 1)
    with pytest.raises(SizeLimitExceeded):
        SmallCodec.encode(transactions)
    with pytest.raises(DecodingError):
        SmallCodec.decode(body)

    assert BlobCodec.max_body_size == MAX_COLLATION_BODY_SIZE


def test_malformed_transaction_reports_its_index(transactions):
    bad_transaction = transactions[1].copy(to=b"\x01" * 19)

    with pytest.raises(EncodingError) as excinfo:
        BlobCodec.encode((transactions[0], bad_transaction, transactions[2]))

    assert excinfo.value.index == 1


def test_negative_field_is_rejected(transactions):
    bad_transaction = transactions[0].copy(value=-1)

    with pytest.raises(EncodingError) as excinfo:
        BlobCodec.encode((bad_transaction,))

    assert excinfo.value.index == 0


def test_object_without_transaction_fields_is_rejected(transactions):
    with pytest.raises(EncodingError) as excinfo:
        BlobCodec.encode(transactions + (object(),))

    assert excinfo.value.index == 3


def test_decoding_short_buffer_fails():
    with pytest.raises(DecodingError):
        BlobCodec.decode(b"\x01\x02\x03\x04\x05")


def test_decoding_truncated_body_fails(transactions):
    body = BlobCodec.encode(transactions)
    with pytest.raises(DecodingError):
        BlobCodec.decode(body[:-CHUNK_SIZE])


def test_decoding_invalid_record_fails():
    # one well formed chunk holding bytes that are not an rlp list
    body = b"\x05" + b"\xff" * 4 + b"\x00" * 27
    with pytest.raises(DecodingError):
        BlobCodec.decode(body)


def test_decoding_non_bytes_fails():
    with pytest.raises(DecodingError):
        BlobCodec.decode("not bytes")


def test_skip_evm_codec(transactions):
    SkipEVMCodec = BlobCodec.configure(skip_evm=True)

    raw_blobs = SkipEVMCodec.to_raw_blobs(transactions)
    assert all(raw_blob.skip_evm for raw_blob in raw_blobs)

    body = SkipEVMCodec.encode(transactions)
    assert body != BlobCodec.encode(transactions)
    assert body[-CHUNK_SIZE] & SKIP_EVM_FLAG
    assert BlobCodec.decode(body) == transactions


class StrictTransaction(ShardTransaction):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.to == b"":
            raise ValidationError("Contract creation is not allowed")


def test_rejected_transaction_construction_fails_decoding(transactions):
    StrictCodec = BlobCodec.configure(transaction_class=StrictTransaction)
    contract_creation = transactions[0].copy(to=b"")

    assert StrictCodec.decode(BlobCodec.encode(transactions[1:])) == transactions[1:]

    body = BlobCodec.encode((transactions[1], contract_creation))
    with pytest.raises(DecodingError):
        StrictCodec.decode(body)


def test_transaction_class_with_other_arity_fails_decoding(transactions):
    WrongArityCodec = BlobCodec.configure(transaction_class=UnsignedShardTransaction)

    with pytest.raises(DecodingError):
        WrongArityCodec.decode(BlobCodec.encode(transactions))

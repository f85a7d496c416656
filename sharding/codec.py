from typing import (
    Iterator,
    Sequence,
    Tuple,
    Type,
)

from eth_utils import (
    ValidationError,
    get_extended_debug_logger,
    to_tuple,
)
import rlp

from sharding._utils.blobs import (
    deserialize_blobs,
    serialize_blobs,
)
from sharding._utils.datatypes import (
    Configurable,
)
from sharding.abc import (
    BlobCodecAPI,
    SignedTransactionAPI,
    TransactionFieldsAPI,
)
from sharding.constants import (
    MAX_COLLATION_BODY_SIZE,
)
from sharding.exceptions import (
    DecodingError,
    EncodingError,
    SizeLimitExceeded,
)
from sharding.rlp.sedes import (
    raw_transaction_record,
)
from sharding.rlp.transactions import (
    ShardTransaction,
)
from sharding.typing import (
    RawBlob,
)

RAW_RECORD_FIELD_NAMES = (
    "nonce",
    "gas_price",
    "gas",
    "to",
    "value",
    "data",
    "v",
    "r",
    "s",
)


class BlobCodec(Configurable, BlobCodecAPI):
    """
    Packs transactions into a collation body, one raw blob per transaction,
    and unpacks them again.

    Subclass through ``configure()`` to change the transaction class, the
    maximum body size or the skip-EVM flag written into every blob.
    """

    transaction_class: Type[SignedTransactionAPI] = ShardTransaction
    max_body_size: int = MAX_COLLATION_BODY_SIZE
    skip_evm: bool = False

    logger = get_extended_debug_logger("sharding.codec.BlobCodec")

    @classmethod
    @to_tuple
    def to_raw_blobs(cls, transactions: Sequence[TransactionFieldsAPI]) -> Iterator[RawBlob]:
        for index, transaction in enumerate(transactions):
            try:
                fields = tuple(getattr(transaction, name) for name in RAW_RECORD_FIELD_NAMES)
            except AttributeError as err:
                raise EncodingError(
                    f"Transaction {index} does not expose the raw record fields: {err}",
                    index,
                ) from err

            try:
                data = rlp.encode(fields, sedes=raw_transaction_record)
            except rlp.SerializationError as err:
                raise EncodingError(
                    f"Creation of raw blob from transaction {index} failed: {err}",
                    index,
                ) from err

            yield RawBlob(data=data, skip_evm=cls.skip_evm)

    @classmethod
    @to_tuple
    def from_raw_blobs(cls, raw_blobs: Sequence[RawBlob]) -> Iterator[SignedTransactionAPI]:
        for index, blob in enumerate(raw_blobs):
            try:
                fields = rlp.decode(blob.data, sedes=raw_transaction_record)
            except (rlp.DecodingError, rlp.DeserializationError) as err:
                raise DecodingError(
                    f"Creation of transaction from raw blob {index} failed: {err}"
                ) from err

            try:
                transaction = cls.transaction_class(*fields)
            except (TypeError, ValueError, ValidationError) as err:
                raise DecodingError(
                    f"Raw blob {index} does not fit {cls.transaction_class.__name__}: {err}"
                ) from err

            yield transaction

    @classmethod
    def encode(cls, transactions: Sequence[TransactionFieldsAPI]) -> bytes:
        raw_blobs = cls.to_raw_blobs(transactions)
        body = serialize_blobs(raw_blobs)

        if len(body) > cls.max_body_size:
            raise SizeLimitExceeded(
                f"The serialized body of {len(body)} bytes exceeds the collation "
                f"size limit of {cls.max_body_size} bytes",
                len(body),
                cls.max_body_size,
            )

        cls.logger.debug2(
            "Encoded %d transactions into a %d byte collation body",
            len(raw_blobs),
            len(body),
        )
        return body

    @classmethod
    def decode(cls, body: bytes) -> Tuple[SignedTransactionAPI, ...]:
        if not isinstance(body, bytes):
            raise DecodingError(f"Collation body must be bytes, got {type(body)}")
        if len(body) > cls.max_body_size:
            raise DecodingError(
                f"Collation body of {len(body)} bytes exceeds the size limit "
                f"of {cls.max_body_size} bytes"
            )

        raw_blobs = deserialize_blobs(body)
        transactions = cls.from_raw_blobs(raw_blobs)

        cls.logger.debug2(
            "Decoded %d transactions from a %d byte collation body",
            len(transactions),
            len(body),
        )
        return transactions

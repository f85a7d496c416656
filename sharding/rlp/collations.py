from typing import (
    Sequence,
    Tuple,
    Type,
)

from eth_typing import (
    Address,
    Hash32,
)
from eth_utils import (
    ValidationError,
    encode_hex,
    get_extended_debug_logger,
)

from sharding._utils.datatypes import (
    Configurable,
)
from sharding.abc import (
    BlobCodecAPI,
    ChunkRootEngineAPI,
    CollationAPI,
    CollationHeaderAPI,
    SignedTransactionAPI,
)
from sharding.chunks import (
    ChunkRootEngine,
)
from sharding.codec import (
    BlobCodec,
)
from sharding.exceptions import (
    DecodingError,
)

from .headers import (
    CollationHeader,
)


class Collation(Configurable, CollationAPI):
    """
    A collation header together with its serialized body and the
    transactions the body encodes.

    The transactions are the source of truth. Whoever changes them must call
    :meth:`commit_transactions` (or :meth:`set_body` with a freshly encoded
    body) before the header is hashed or signed. Instances are not safe for
    concurrent mutation.
    """

    codec_class: Type[BlobCodecAPI] = BlobCodec
    chunk_root_engine: ChunkRootEngineAPI = ChunkRootEngine()

    logger = get_extended_debug_logger("sharding.rlp.collations.Collation")

    def __init__(
        self,
        header: CollationHeaderAPI,
        body: bytes,
        transactions: Sequence[SignedTransactionAPI],
    ) -> None:
        self._header = header
        self._body = body
        self._transactions = tuple(transactions)

    def __repr__(self) -> str:
        return "<Collation shard={} period={} hash={}>".format(
            self.shard_id,
            self.period,
            encode_hex(self.hash)[2:10],
        )

    #
    # Construction
    #
    @classmethod
    def from_transactions(
        cls,
        shard_id: int,
        period: int,
        proposer_address: Address,
        transactions: Sequence[SignedTransactionAPI],
    ) -> "Collation":
        body = cls.codec_class.encode(transactions)
        header = CollationHeader(
            shard_id=shard_id,
            chunk_root=cls.chunk_root_engine.compute_chunk_root(body),
            period=period,
            proposer_address=proposer_address,
        )
        return cls(header, body, transactions)

    @classmethod
    def from_body(cls, header: CollationHeaderAPI, body: bytes) -> "Collation":
        transactions = cls.codec_class.decode(body)
        return cls(header, body, transactions)

    #
    # Accessors
    #
    @property
    def header(self) -> CollationHeaderAPI:
        return self._header

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def transactions(self) -> Tuple[SignedTransactionAPI, ...]:
        return self._transactions

    @property
    def hash(self) -> Hash32:
        return self._header.hash

    @property
    def shard_id(self) -> int:
        return self._header.shard_id

    @property
    def chunk_root(self) -> Hash32:
        return self._header.chunk_root

    @property
    def period(self) -> int:
        return self._header.period

    @property
    def proposer_address(self) -> Address:
        return self._header.proposer_address

    @property
    def proposer_signature(self) -> bytes:
        return self._header.proposer_signature

    #
    # Mutation
    #
    def recompute_chunk_root(self) -> None:
        chunk_root = self.chunk_root_engine.compute_chunk_root(self._body)
        if chunk_root != self._header.chunk_root:
            self.logger.debug(
                "Chunk root of collation in shard %d period %d changed from %s to %s",
                self.shard_id,
                self.period,
                encode_hex(self._header.chunk_root),
                encode_hex(chunk_root),
            )
        self._header = self._header.copy(chunk_root=chunk_root)

    def set_body(self, body: bytes) -> None:
        self._body = body
        self.recompute_chunk_root()

    def set_transactions(self, transactions: Sequence[SignedTransactionAPI]) -> None:
        self._transactions = tuple(transactions)

    def commit_transactions(self) -> None:
        self.set_body(self.serialize())

    def set_proposer_signature(self, signature: bytes) -> None:
        self._header = self._header.copy(proposer_signature=signature)

    #
    # Serialization
    #
    def serialize(self) -> bytes:
        return self.codec_class.encode(self._transactions)

    @classmethod
    def deserialize(cls, body: bytes) -> Tuple[SignedTransactionAPI, ...]:
        return cls.codec_class.decode(body)

    #
    # Validation
    #
    def validate(self) -> None:
        expected_chunk_root = self.chunk_root_engine.compute_chunk_root(self._body)
        if expected_chunk_root != self._header.chunk_root:
            raise ValidationError(
                "Collation header has a stale chunk root.\n"
                f"- header chunk_root: {encode_hex(self._header.chunk_root)}\n"
                f"- body chunk_root: {encode_hex(expected_chunk_root)}"
            )

        try:
            decoded_transactions = self.codec_class.decode(self._body)
        except DecodingError as err:
            raise ValidationError(f"Collation body cannot be decoded: {err}") from err

        if decoded_transactions != self._transactions:
            raise ValidationError(
                f"Collation body encodes {len(decoded_transactions)} transactions that "
                f"differ from the {len(self._transactions)} transactions of the collation"
            )


def deserialize(body: bytes) -> Tuple[SignedTransactionAPI, ...]:
    """
    Decode the transactions of a collation body received over the wire.
    """
    return Collation.deserialize(body)

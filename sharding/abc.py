from abc import (
    ABC,
    abstractmethod,
)
from typing import (
    Any,
    ClassVar,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

from eth_keys.datatypes import (
    PrivateKey,
)
from eth_typing import (
    Address,
    Hash32,
)
from eth_utils import (
    ExtendedDebugLogger,
)

from sharding.typing import (
    RawBlob,
)

THeader = TypeVar("THeader", bound="CollationHeaderAPI")


class TransactionFieldsAPI(ABC):
    """
    The fields a transaction must expose to be packed into a collation body.
    """

    nonce: int
    gas_price: int
    gas: int
    to: Address
    value: int
    data: bytes
    v: int
    r: int
    s: int

    @property
    @abstractmethod
    def hash(self) -> Hash32:
        """
        Return the hash of the transaction.
        """
        ...


class UnsignedTransactionAPI(ABC):
    """
    A transaction that has not been signed yet.
    """

    nonce: int
    gas_price: int
    gas: int
    to: Address
    value: int
    data: bytes

    @abstractmethod
    def validate(self) -> None:
        """
        Hook called during instantiation to ensure that all transaction
        parameters pass validation rules.
        """
        ...

    @abstractmethod
    def as_signed_transaction(self, private_key: PrivateKey) -> "SignedTransactionAPI":
        """
        Return a version of this transaction which has been signed using the
        provided `private_key`
        """
        ...


class SignedTransactionAPI(TransactionFieldsAPI):
    @property
    @abstractmethod
    def sender(self) -> Address:
        """
        Convenience and performance property for the return value of `get_sender`
        """
        ...

    @abstractmethod
    def validate(self) -> None:
        """
        Ensure that all transaction parameters pass validation rules.
        """
        ...

    @abstractmethod
    def check_signature_validity(self) -> None:
        """
        Check if the signature is valid. Raise a ``ValidationError`` if the signature
        is invalid.
        """
        ...

    @abstractmethod
    def get_sender(self) -> Address:
        """
        Get the 20-byte address which sent this transaction.
        """
        ...

    @abstractmethod
    def get_message_for_signing(self) -> bytes:
        """
        Return the bytestring that should be signed in order to create a signed transaction.
        """
        ...


class CollationHeaderAPI(ABC):
    """
    The header of a collation, committing to the shard, the period, the
    proposer and the body through its chunk root.
    """

    shard_id: int
    chunk_root: Hash32
    period: int
    proposer_address: Address
    proposer_signature: bytes

    @property
    @abstractmethod
    def hash(self) -> Hash32:
        """
        Return the hash of the header over all fields, including the proposer
        signature.
        """
        ...

    @property
    @abstractmethod
    def signing_hash(self) -> Hash32:
        """
        Return the hash of the header with an empty proposer signature. This is
        the message a proposer signs.
        """
        ...

    @property
    @abstractmethod
    def is_signed(self) -> bool:
        """
        Return ``True`` if the header carries a proposer signature.
        """
        ...

    @abstractmethod
    def validate(self) -> None:
        """
        Raise ``ValidationError`` if any field is out of range.
        """
        ...

    @abstractmethod
    def encode(self) -> bytes:
        """
        Return the canonical encoding of the header.
        """
        ...

    @classmethod
    @abstractmethod
    def decode(cls: Type[THeader], encoded: bytes) -> THeader:
        """
        Decode a header from its canonical encoding.
        """
        ...

    # We can remove this API and inherit from rlp.Serializable when it becomes typesafe
    @abstractmethod
    def copy(self: THeader, *args: Any, **kwargs: Any) -> THeader:
        """
        Return a copy of the header, optionally overwriting any of its properties.
        """
        ...


class BlobCodecAPI(ABC):
    """
    Converts an ordered sequence of transactions into a single bounded
    collation body and back.
    """

    transaction_class: ClassVar[Type[SignedTransactionAPI]]
    max_body_size: ClassVar[int]
    skip_evm: ClassVar[bool]
    logger: ClassVar[ExtendedDebugLogger]

    @classmethod
    @abstractmethod
    def to_raw_blobs(
        cls, transactions: Sequence[TransactionFieldsAPI]
    ) -> Tuple[RawBlob, ...]:
        """
        Convert each transaction into its raw blob record.
        """
        ...

    @classmethod
    @abstractmethod
    def from_raw_blobs(cls, raw_blobs: Sequence[RawBlob]) -> Tuple[SignedTransactionAPI, ...]:
        """
        Rebuild transactions from their raw blob records.
        """
        ...

    @classmethod
    @abstractmethod
    def encode(cls, transactions: Sequence[TransactionFieldsAPI]) -> bytes:
        """
        Encode ``transactions`` into a collation body.
        """
        ...

    @classmethod
    @abstractmethod
    def decode(cls, body: bytes) -> Tuple[SignedTransactionAPI, ...]:
        """
        Decode a collation body into its transactions.
        """
        ...


class ChunkRootEngineAPI(ABC):
    """
    Derives the chunk root of a collation body.
    """

    chunk_size: int

    @abstractmethod
    def compute_chunk_root(self, body: bytes) -> Hash32:
        """
        Return the commitment over the ordered chunks of ``body``.
        """
        ...


class CollationAPI(ABC):
    """
    A header, its serialized body, and the transactions the body encodes.
    """

    codec_class: ClassVar[Type[BlobCodecAPI]]
    chunk_root_engine: ClassVar[ChunkRootEngineAPI]

    @classmethod
    @abstractmethod
    def from_transactions(
        cls,
        shard_id: int,
        period: int,
        proposer_address: Address,
        transactions: Sequence[SignedTransactionAPI],
    ) -> "CollationAPI":
        """
        Build a collation from a set of transactions, deriving its body and
        chunk root. The header is left unsigned.
        """
        ...

    @classmethod
    @abstractmethod
    def from_body(cls, header: CollationHeaderAPI, body: bytes) -> "CollationAPI":
        """
        Build a collation from a received header and body, decoding the
        transactions.
        """
        ...

    @property
    @abstractmethod
    def header(self) -> CollationHeaderAPI:
        ...

    @property
    @abstractmethod
    def body(self) -> bytes:
        ...

    @property
    @abstractmethod
    def transactions(self) -> Tuple[SignedTransactionAPI, ...]:
        ...

    @property
    @abstractmethod
    def hash(self) -> Hash32:
        ...

    @property
    @abstractmethod
    def proposer_address(self) -> Address:
        ...

    @abstractmethod
    def recompute_chunk_root(self) -> None:
        """
        Recompute the header's chunk root from the current body.
        """
        ...

    @abstractmethod
    def set_body(self, body: bytes) -> None:
        """
        Replace the body and recompute the chunk root.
        """
        ...

    @abstractmethod
    def set_transactions(self, transactions: Sequence[SignedTransactionAPI]) -> None:
        """
        Replace the transactions. The body and chunk root are not updated.
        """
        ...

    @abstractmethod
    def commit_transactions(self) -> None:
        """
        Re-encode the transactions into the body and recompute the chunk root.
        """
        ...

    @abstractmethod
    def set_proposer_signature(self, signature: bytes) -> None:
        """
        Replace the header with a copy carrying ``signature``.
        """
        ...

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Encode the transactions into a body without changing the collation.
        """
        ...

    @abstractmethod
    def validate(self) -> None:
        """
        Raise ``ValidationError`` if the body, transactions and chunk root do
        not agree.
        """
        ...

from typing import (
    cast,
)

from eth_hash.auto import (
    keccak,
)
from eth_typing import (
    Address,
    Hash32,
)
from eth_utils import (
    encode_hex,
)
import rlp
from rlp.sedes import (
    big_endian_int,
    binary,
)

from sharding.abc import (
    CollationHeaderAPI,
)
from sharding.constants import (
    EMPTY_SIGNATURE,
)
from sharding.validation import (
    validate_canonical_address,
    validate_is_bytes,
    validate_uint256,
    validate_word,
)

from .sedes import (
    canonical_address,
    hash32,
)


class CollationHeader(rlp.Serializable, CollationHeaderAPI):
    """
    The header of a collation, signed by its proposer.

    ``hash`` covers every field including ``proposer_signature``, so it changes
    once the header is signed. Proposers sign ``signing_hash``, which is taken
    over the same header with an empty signature.
    """

    fields = [
        ("shard_id", big_endian_int),
        ("chunk_root", hash32),
        ("period", big_endian_int),
        ("proposer_address", canonical_address),
        ("proposer_signature", binary),
    ]

    def __init__(
        self,
        shard_id: int,
        chunk_root: Hash32,
        period: int,
        proposer_address: Address,
        proposer_signature: bytes = EMPTY_SIGNATURE,
    ) -> None:
        super().__init__(
            shard_id=shard_id,
            chunk_root=chunk_root,
            period=period,
            proposer_address=proposer_address,
            proposer_signature=proposer_signature,
        )

    def __repr__(self) -> str:
        return "<CollationHeader shard={} period={} hash={}>".format(
            self.shard_id,
            self.period,
            encode_hex(self.hash)[2:10],
        )

    @property
    def hash(self) -> Hash32:
        return cast(Hash32, keccak(self.encode()))

    @property
    def signing_hash(self) -> Hash32:
        unsigned_header = self.copy(proposer_signature=EMPTY_SIGNATURE)
        return cast(Hash32, keccak(unsigned_header.encode()))

    @property
    def hex_hash(self) -> str:
        return encode_hex(self.hash)

    @property
    def is_signed(self) -> bool:
        return self.proposer_signature != EMPTY_SIGNATURE

    def validate(self) -> None:
        validate_uint256(self.shard_id, title="CollationHeader.shard_id")
        validate_word(self.chunk_root, title="CollationHeader.chunk_root")
        validate_uint256(self.period, title="CollationHeader.period")
        validate_canonical_address(
            self.proposer_address,
            title="CollationHeader.proposer_address",
        )
        validate_is_bytes(self.proposer_signature, title="CollationHeader.proposer_signature")

    def encode(self) -> bytes:
        return rlp.encode(self)

    @classmethod
    def decode(cls, encoded: bytes) -> "CollationHeader":
        return rlp.decode(encoded, sedes=cls)

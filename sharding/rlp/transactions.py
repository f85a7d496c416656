from typing import (
    Union,
    cast,
)

from cached_property import (
    cached_property,
)
from eth_hash.auto import (
    keccak,
)
from eth_keys.datatypes import (
    PrivateKey,
)
from eth_typing import (
    Address,
    Hash32,
)
from eth_utils import (
    ValidationError,
)
import rlp
from rlp.sedes import (
    big_endian_int,
    binary,
)

from sharding._utils.transactions import (
    V_OFFSET,
    create_transaction_signature,
    extract_transaction_sender,
    validate_transaction_signature,
)
from sharding.abc import (
    SignedTransactionAPI,
    UnsignedTransactionAPI,
)
from sharding.constants import (
    ZERO_ADDRESS,
)
from sharding.validation import (
    validate_canonical_address,
    validate_gte,
    validate_is_bytes,
    validate_lt_secpk1n,
    validate_lte,
    validate_uint256,
)

from .sedes import (
    address,
)

UNSIGNED_TRANSACTION_FIELDS = [
    ("nonce", big_endian_int),
    ("gas_price", big_endian_int),
    ("gas", big_endian_int),
    ("to", address),
    ("value", big_endian_int),
    ("data", binary),
]

SIGNED_TRANSACTION_FIELDS = UNSIGNED_TRANSACTION_FIELDS + [
    ("v", big_endian_int),
    ("r", big_endian_int),
    ("s", big_endian_int),
]


def _validate_unsigned_fields(
    transaction: Union[SignedTransactionAPI, UnsignedTransactionAPI]
) -> None:
    validate_uint256(transaction.nonce, title="Transaction.nonce")
    validate_uint256(transaction.gas_price, title="Transaction.gas_price")
    validate_uint256(transaction.gas, title="Transaction.gas")
    if transaction.to != b"":
        validate_canonical_address(transaction.to, title="Transaction.to")
    validate_uint256(transaction.value, title="Transaction.value")
    validate_is_bytes(transaction.data, title="Transaction.data")


class ShardTransaction(rlp.Serializable, SignedTransactionAPI):
    """
    A signed transaction as carried inside a collation.
    """

    fields = SIGNED_TRANSACTION_FIELDS

    @property
    def hash(self) -> Hash32:
        return cast(Hash32, keccak(rlp.encode(self)))

    @cached_property
    def sender(self) -> Address:
        return self.get_sender()

    @property
    def y_parity(self) -> int:
        return self.v - V_OFFSET

    def validate(self) -> None:
        _validate_unsigned_fields(self)

        validate_uint256(self.v, title="Transaction.v")
        validate_uint256(self.r, title="Transaction.r")
        validate_uint256(self.s, title="Transaction.s")

        validate_lt_secpk1n(self.r, title="Transaction.r")
        validate_gte(self.r, minimum=1, title="Transaction.r")
        validate_lt_secpk1n(self.s, title="Transaction.s")
        validate_gte(self.s, minimum=1, title="Transaction.s")

        validate_gte(self.v, minimum=V_OFFSET, title="Transaction.v")
        validate_lte(self.v, maximum=V_OFFSET + 1, title="Transaction.v")

        self.check_signature_validity()

    @property
    def is_signature_valid(self) -> bool:
        try:
            self.check_signature_validity()
        except ValidationError:
            return False
        else:
            return True

    def check_signature_validity(self) -> None:
        validate_transaction_signature(self)

    def get_sender(self) -> Address:
        return extract_transaction_sender(self)

    def get_message_for_signing(self) -> bytes:
        return rlp.encode(
            UnsignedShardTransaction(
                nonce=self.nonce,
                gas_price=self.gas_price,
                gas=self.gas,
                to=self.to,
                value=self.value,
                data=self.data,
            )
        )

    @classmethod
    def create_unsigned_transaction(
        cls,
        *,
        nonce: int,
        gas_price: int,
        gas: int,
        to: Address,
        value: int,
        data: bytes
    ) -> "UnsignedShardTransaction":
        return UnsignedShardTransaction(nonce, gas_price, gas, to, value, data)

    def __repr__(self) -> str:
        return f"<ShardTransaction nonce={self.nonce} hash={self.hash.hex()[:8]}>"


class UnsignedShardTransaction(rlp.Serializable, UnsignedTransactionAPI):
    fields = UNSIGNED_TRANSACTION_FIELDS

    def __init__(
        self,
        nonce: int,
        gas_price: int,
        gas: int,
        to: Address = ZERO_ADDRESS,
        value: int = 0,
        data: bytes = b"",
    ) -> None:
        super().__init__(nonce, gas_price, gas, to, value, data)

    def validate(self) -> None:
        _validate_unsigned_fields(self)

    def as_signed_transaction(self, private_key: PrivateKey) -> ShardTransaction:
        v, r, s = create_transaction_signature(self, private_key)
        return ShardTransaction(
            nonce=self.nonce,
            gas_price=self.gas_price,
            gas=self.gas,
            to=self.to,
            value=self.value,
            data=self.data,
            v=v,
            r=r,
            s=s,
        )

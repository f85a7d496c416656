from eth_utils import (
    ValidationError,
)
import pytest
import rlp

from sharding._utils.transactions import (
    V_OFFSET,
    create_transaction_signature,
)
from sharding.constants import (
    SECPK1_N,
)
from sharding.rlp.transactions import (
    ShardTransaction,
    UnsignedShardTransaction,
)


def test_signed_transaction_sender(transactions, sender_private_key):
    expected_sender = sender_private_key.public_key.to_canonical_address()

    for transaction in transactions:
        assert transaction.sender == expected_sender
        assert transaction.is_signature_valid
        transaction.validate()


def test_tampered_transaction_has_other_sender(transactions, sender_private_key):
    tampered = transactions[0].copy(value=10**18)
    assert tampered.sender != sender_private_key.public_key.to_canonical_address()


def test_invalid_signature_values(transactions):
    with pytest.raises(ValidationError):
        transactions[0].copy(v=29).validate()
    with pytest.raises(ValidationError):
        transactions[0].copy(r=0).validate()


def test_transaction_hash(transactions):
    transaction = transactions[0]
    assert transaction.hash == ShardTransaction.deserialize(
        rlp.decode(rlp.encode(transaction))
    ).hash
    assert len({transaction.hash for transaction in transactions}) == len(transactions)


def test_create_unsigned_transaction(transactions):
    transaction = transactions[2]
    unsigned = ShardTransaction.create_unsigned_transaction(
        nonce=transaction.nonce,
        gas_price=transaction.gas_price,
        gas=transaction.gas,
        to=transaction.to,
        value=transaction.value,
        data=transaction.data,
    )

    assert isinstance(unsigned, UnsignedShardTransaction)
    assert rlp.encode(unsigned) == transaction.get_message_for_signing()
    unsigned.validate()


def test_contract_creation_transaction(sender_private_key):
    transaction = UnsignedShardTransaction(
        nonce=0,
        gas_price=1,
        gas=100000,
        to=b"",
        data=b"\x60\x00",
    ).as_signed_transaction(sender_private_key)

    transaction.validate()
    assert transaction.to == b""


def test_unsigned_transaction_validation():
    with pytest.raises(ValidationError):
        UnsignedShardTransaction(nonce=-1, gas_price=1, gas=1).validate()
    with pytest.raises(ValidationError):
        UnsignedShardTransaction(nonce=0, gas_price=1, gas=1, to=b"\x01" * 19).validate()


def test_create_transaction_signature(sender_private_key):
    unsigned = UnsignedShardTransaction(nonce=0, gas_price=1, gas=21000, to=b"\x33" * 20)

    vrs = create_transaction_signature(unsigned, sender_private_key)
    v, r, s = vrs

    assert isinstance(vrs, tuple)
    assert v in (V_OFFSET, V_OFFSET + 1)
    assert 0 < r < SECPK1_N
    assert 0 < s < SECPK1_N

    signed = unsigned.as_signed_transaction(sender_private_key)
    assert (signed.v, signed.r, signed.s) == vrs
    assert signed.sender == sender_private_key.public_key.to_canonical_address()

from eth_keys import (
    keys,
)
import pytest

from sharding.rlp.transactions import (
    UnsignedShardTransaction,
)


@pytest.fixture
def sender_private_key():
    return keys.PrivateKey(b"\x11" * 32)


@pytest.fixture
def proposer_private_key():
    return keys.PrivateKey(b"\x22" * 32)


@pytest.fixture
def proposer_address(proposer_private_key):
    return proposer_private_key.public_key.to_canonical_address()


@pytest.fixture
def recipient():
    return b"\x33" * 20


@pytest.fixture
def make_transaction(sender_private_key, recipient):
    def _make_transaction(nonce, value=0, data=b""):
        return UnsignedShardTransaction(
            nonce=nonce,
            gas_price=10,
            gas=21000 + 68 * len(data),
            to=recipient,
            value=value,
            data=data,
        ).as_signed_transaction(sender_private_key)
    return _make_transaction


@pytest.fixture
def transactions(make_transaction):
    return tuple(
        make_transaction(nonce, value=nonce * 100, data=b"\x44" * (nonce * 10))
        for nonce in range(3)
    )

from eth_keys import (
    datatypes,
    keys,
)
from eth_keys.exceptions import (
    BadSignature,
)
from eth_typing import (
    Address,
)
from eth_utils import (
    ValidationError,
)
import rlp

from sharding.abc import (
    SignedTransactionAPI,
    UnsignedTransactionAPI,
)
from sharding.typing import (
    VRS,
)

# Add this offset to y_parity to get "v"
V_OFFSET = 27


def create_transaction_signature(
    unsigned_txn: UnsignedTransactionAPI,
    private_key: datatypes.PrivateKey,
) -> VRS:
    message = rlp.encode(unsigned_txn)
    signature = private_key.sign_msg(message)

    canonical_v, r, s = signature.vrs
    return VRS((canonical_v + V_OFFSET, r, s))


def validate_transaction_signature(transaction: SignedTransactionAPI) -> None:
    message = transaction.get_message_for_signing()
    vrs = (transaction.v - V_OFFSET, transaction.r, transaction.s)
    try:
        signature = keys.Signature(vrs=vrs)
        public_key = signature.recover_public_key_from_msg(message)
    except BadSignature as e:
        raise ValidationError(f"Bad Signature: {str(e)}")

    if not signature.verify_msg(message, public_key):
        raise ValidationError("Invalid Signature")


def extract_transaction_sender(transaction: SignedTransactionAPI) -> Address:
    vrs = (transaction.v - V_OFFSET, transaction.r, transaction.s)
    signature = keys.Signature(vrs=vrs)
    message = transaction.get_message_for_signing()
    public_key = signature.recover_public_key_from_msg(message)
    return Address(public_key.to_canonical_address())

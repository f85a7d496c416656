from eth_keys import (
    datatypes,
    keys,
)
from eth_keys.exceptions import (
    BadSignature,
    ValidationError as KeysValidationError,
)
from eth_typing import (
    Address,
)
from eth_utils import (
    ValidationError,
    encode_hex,
)

from sharding.abc import (
    CollationHeaderAPI,
)
from sharding.constants import (
    SIGNATURE_SIZE,
)
from sharding.validation import (
    validate_length,
)


def create_header_signature(
    header: CollationHeaderAPI, private_key: datatypes.PrivateKey
) -> bytes:
    """
    Sign the signing hash of ``header``. Any signature already on the header
    is ignored.
    """
    signature = private_key.sign_msg_hash(header.signing_hash)
    return signature.to_bytes()


def sign_collation_header(
    header: CollationHeaderAPI, private_key: datatypes.PrivateKey
) -> CollationHeaderAPI:
    """
    Return a copy of ``header`` carrying the proposer signature made with
    ``private_key``.
    """
    signature = create_header_signature(header, private_key)
    return header.copy(proposer_signature=signature)


def extract_header_signer(header: CollationHeaderAPI) -> Address:
    validate_length(
        header.proposer_signature,
        SIGNATURE_SIZE,
        title="CollationHeader.proposer_signature",
    )

    try:
        signature = keys.Signature(header.proposer_signature)
        public_key = signature.recover_public_key_from_msg_hash(header.signing_hash)
    except (BadSignature, KeysValidationError) as e:
        raise ValidationError(f"Bad Signature: {str(e)}")

    return Address(public_key.to_canonical_address())


def validate_header_signature(header: CollationHeaderAPI) -> None:
    signer = extract_header_signer(header)
    if signer != header.proposer_address:
        raise ValidationError(
            f"Collation header is signed by {encode_hex(signer)}, "
            f"not by its proposer {encode_hex(header.proposer_address)}"
        )

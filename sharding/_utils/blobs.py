from io import (
    BytesIO,
)
from typing import (
    Iterable,
    Iterator,
)

from eth_utils import (
    ValidationError,
    apply_to_return_value,
    to_tuple,
)

from sharding._utils.chunks import (
    iterate_full_chunks,
)
from sharding.constants import (
    CHUNK_DATA_SIZE,
    CHUNK_SIZE,
    DATA_LENGTH_BITS,
    RESERVED_BITS,
    SKIP_EVM_FLAG,
)
from sharding.exceptions import (
    DecodingError,
    EncodingError,
)
from sharding.typing import (
    RawBlob,
)


def get_chunk_count(blob_size: int) -> int:
    # ceil(N / k) == -(-N // k)
    return -(-blob_size // CHUNK_DATA_SIZE)


def get_serialized_size(blob_size: int) -> int:
    return get_chunk_count(blob_size) * CHUNK_SIZE


def _serialize_blob(blob: RawBlob) -> Iterator[bytes]:
    data = blob.data
    for blob_index in range(0, len(data), CHUNK_DATA_SIZE):
        chunk_data = data[blob_index:blob_index + CHUNK_DATA_SIZE]
        is_terminal = blob_index + CHUNK_DATA_SIZE >= len(data)

        if is_terminal:
            indicator = len(chunk_data)
            if blob.skip_evm:
                indicator |= SKIP_EVM_FLAG
        else:
            indicator = 0

        yield bytes([indicator])
        yield chunk_data.ljust(CHUNK_DATA_SIZE, b"\x00")


@apply_to_return_value(b"".join)
def serialize_blobs(blobs: Iterable[RawBlob]) -> Iterator[bytes]:
    """
    Serialize a sequence of raw blobs into a collation body.

    Every blob is split into chunks of one indicator byte and 31 data bytes.
    Only the terminal chunk of a blob has a non-zero indicator: its low five
    bits hold the number of data bytes in the chunk and the high bit is the
    skip-EVM flag. The unused tail of the terminal chunk is zero.
    """
    for index, blob in enumerate(blobs):
        if len(blob.data) == 0:
            raise EncodingError(f"Cannot serialize blob {index} of length 0", index)
        yield from _serialize_blob(blob)


def _validate_terminal_padding(chunk: bytes, length: int) -> None:
    if any(chunk[1 + length:]):
        raise DecodingError(
            f"Terminal chunk holding {length} bytes has non-zero padding"
        )


@to_tuple
def deserialize_blobs(body: bytes) -> Iterator[RawBlob]:
    """
    Deserialize the raw blobs encoded in a collation body.

    The whole body must be well formed; a body that ends in the middle of a
    blob is rejected.
    """
    try:
        chunks = iterate_full_chunks(body, CHUNK_SIZE)
    except ValidationError as err:
        raise DecodingError(str(err)) from err

    blob = BytesIO()
    for chunk_index, chunk in enumerate(chunks):
        indicator = chunk[0]
        if indicator & RESERVED_BITS:
            raise DecodingError(
                f"Chunk {chunk_index} has reserved indicator bits set: {indicator:#010b}"
            )

        length = indicator & DATA_LENGTH_BITS
        skip_evm = bool(indicator & SKIP_EVM_FLAG)

        if length == 0:
            if skip_evm:
                raise DecodingError(
                    f"Chunk {chunk_index} is not terminal but carries the skip-EVM flag"
                )
            blob.write(chunk[1:])
        else:
            _validate_terminal_padding(chunk, length)
            blob.write(chunk[1:1 + length])
            yield RawBlob(data=blob.getvalue(), skip_evm=skip_evm)
            blob = BytesIO()

    if blob.tell() != 0:
        raise DecodingError("Collation body ends before the terminal chunk of its last blob")

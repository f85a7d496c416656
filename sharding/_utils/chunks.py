from typing import (
    Iterator,
)

from eth_typing import (
    Hash32,
)
from eth_utils import (
    ValidationError,
    to_tuple,
)

from sharding.constants import (
    CHUNK_SIZE,
)
from sharding.typing import (
    MerkleRootFn,
)
from sharding.validation import (
    validate_gte,
    validate_is_bytes,
)


def iterate_chunks(body: bytes, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """
    Iterate over the consecutive ``chunk_size`` slices of ``body``. The last
    chunk is shorter if the body length is not a multiple of the chunk size.
    """
    for chunk_start in range(0, len(body), chunk_size):
        yield body[chunk_start:chunk_start + chunk_size]


@to_tuple
def iterate_full_chunks(body: bytes, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    if len(body) % chunk_size != 0:
        raise ValidationError(
            f"Body of {len(body)} bytes is not a multiple of the {chunk_size} byte chunk size"
        )
    yield from iterate_chunks(body, chunk_size)


def calc_chunk_root(
    body: bytes,
    merkle_root_fn: MerkleRootFn,
    chunk_size: int = CHUNK_SIZE,
) -> Hash32:
    validate_is_bytes(body, title="Collation body")
    validate_gte(chunk_size, minimum=1, title="Chunk size")
    chunks = tuple(iterate_chunks(body, chunk_size))
    return merkle_root_fn(chunks)

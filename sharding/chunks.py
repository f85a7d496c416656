from eth_typing import (
    Hash32,
)
from eth_utils import (
    encode_hex,
    get_extended_debug_logger,
)

from sharding._utils.chunks import (
    calc_chunk_root,
)
from sharding._utils.trie import (
    make_trie_root,
)
from sharding.abc import (
    ChunkRootEngineAPI,
)
from sharding.constants import (
    CHUNK_SIZE,
)
from sharding.typing import (
    MerkleRootFn,
)
from sharding.validation import (
    validate_gte,
)


class ChunkRootEngine(ChunkRootEngineAPI):
    """
    Splits a collation body into fixed-size chunks and commits to them with a
    pluggable Merkle root function.
    """

    logger = get_extended_debug_logger("sharding.chunks.ChunkRootEngine")

    def __init__(
        self,
        merkle_root_fn: MerkleRootFn = make_trie_root,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        validate_gte(chunk_size, minimum=1, title="Chunk size")
        self.merkle_root_fn = merkle_root_fn
        self.chunk_size = chunk_size

    def compute_chunk_root(self, body: bytes) -> Hash32:
        chunk_root = calc_chunk_root(body, self.merkle_root_fn, self.chunk_size)
        self.logger.debug2(
            "Computed chunk root %s over a %d byte body",
            encode_hex(chunk_root),
            len(body),
        )
        return chunk_root

    def __repr__(self) -> str:
        return (
            f"<ChunkRootEngine merkle_root_fn={self.merkle_root_fn.__name__} "
            f"chunk_size={self.chunk_size}>"
        )

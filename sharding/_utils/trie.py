import functools
from typing import (
    Dict,
    Sequence,
    Tuple,
)

from eth_typing import (
    Hash32,
)
import rlp
from rlp.sedes import (
    big_endian_int,
    binary,
)
from trie import (
    HexaryTrie,
)

from sharding.constants import (
    BLANK_ROOT_HASH,
)


def make_trie_root(chunks: Sequence[bytes]) -> Hash32:
    """
    Return the root of a hexary Patricia trie mapping ``rlp(index)`` to
    ``rlp(chunk)`` for every chunk in order. An empty sequence of chunks
    has the blank root.
    """
    return _make_trie_root(tuple(chunks))


# Proposers and receivers both derive the root of the same body, often more than once.
# Only the root is cached; the trie nodes are discarded with the temporary store.
@functools.lru_cache(16)
def _make_trie_root(chunks: Tuple[bytes, ...]) -> Hash32:
    kv_store: Dict[Hash32, bytes] = {}
    trie = HexaryTrie(kv_store, BLANK_ROOT_HASH)
    with trie.squash_changes() as memory_trie:
        for index, chunk in enumerate(chunks):
            index_key = rlp.encode(index, sedes=big_endian_int)
            memory_trie[index_key] = rlp.encode(chunk, sedes=binary)
    return trie.root_hash

"""Binary keccak Merkle roots over collation body chunks.

Leaves are hashed once before being paired, so a tree over a single chunk has
``keccak(chunk)`` as its root.
"""
import math
from typing import (
    Iterable,
    Iterator,
    Sequence,
    cast,
)

from eth_hash.auto import (
    keccak,
)
from eth_typing import (
    Hash32,
)
from eth_utils import (
    ValidationError,
)
from eth_utils.toolz import (
    iterate,
    nth,
    partition,
)

EMPTY_LEAF = b""


def _hash_layer(layer: Iterable[Hash32]) -> Iterator[Hash32]:
    for left, right in partition(2, layer):
        yield cast(Hash32, keccak(left + right))


def _materialized_hash_layer(layer: Sequence[Hash32]) -> Sequence[Hash32]:
    return tuple(_hash_layer(layer))


def calc_merkle_root(leaves: Sequence[bytes]) -> Hash32:
    """
    Return the root of the binary Merkle tree over ``leaves``. The number of
    leaves must be a power of two.
    """
    if len(leaves) == 0:
        raise ValidationError("No leaves given")

    n_layers = math.log2(len(leaves))
    if not n_layers.is_integer():
        raise ValidationError("Leave number is not a power of two")

    first_layer = tuple(cast(Hash32, keccak(leaf)) for leaf in leaves)
    root_layer = nth(int(n_layers), iterate(_materialized_hash_layer, first_layer))
    if len(root_layer) != 1:
        raise Exception("Invariant: should only be a single value")
    return root_layer[0]


def calc_padded_merkle_root(chunks: Sequence[bytes]) -> Hash32:
    """
    Return the binary Merkle root over ``chunks`` after padding them with
    empty leaves up to the next power of two.
    """
    padded_size = 1 << max(len(chunks) - 1, 0).bit_length()
    padding = (EMPTY_LEAF,) * (padded_size - len(chunks))
    return calc_merkle_root(tuple(chunks) + padding)

from typing import (
    Callable,
    NamedTuple,
    NewType,
    Sequence,
    Tuple,
)

from eth_typing import (
    Hash32,
)

MerkleRootFn = Callable[[Sequence[bytes]], Hash32]

VRS = NewType("VRS", Tuple[int, int, int])


class RawBlob(NamedTuple):
    """
    The wire record of a single transaction inside a collation body.
    """

    data: bytes
    skip_evm: bool = False

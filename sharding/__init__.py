from importlib.metadata import (
    version as __version,
)

from sharding.chunks import (
    ChunkRootEngine,
)
from sharding.codec import (
    BlobCodec,
)
from sharding.rlp.collations import (
    Collation,
    deserialize,
)
from sharding.rlp.headers import (
    CollationHeader,
)
from sharding.rlp.transactions import (
    ShardTransaction,
    UnsignedShardTransaction,
)

__version__ = __version("py-sharding")

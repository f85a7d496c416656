class ShardingError(Exception):
    """
    Base class for all collation errors.
    """


class EncodingError(ShardingError):
    """
    Raised when a transaction cannot be converted into its raw blob record.

    The position of the offending transaction is available as ``index`` so
    that callers can drop or report it.
    """

    @property
    def index(self) -> int:
        return self.args[1]


class SizeLimitExceeded(ShardingError):
    """
    Raised when an encoded collation body is larger than the configured
    maximum body size. The transaction set must be split by the caller.
    """

    @property
    def body_size(self) -> int:
        return self.args[1]

    @property
    def max_body_size(self) -> int:
        return self.args[2]


class DecodingError(ShardingError):
    """
    Raised when a collation body is malformed, truncated, or contains a record
    that cannot be turned back into a transaction.
    """

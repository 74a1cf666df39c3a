"""
RCache Exceptions

Errors raised by RCache itself derive from RCacheError. Store failures
are the redis client's own exceptions and reach the caller unchanged;
they are re-exported here under the names the rest of the package uses.
"""

from redis.exceptions import ConnectionError as StoreConnectionError
from redis.exceptions import RedisError as StoreOperationError
from redis.exceptions import TimeoutError as StoreTimeoutError

# Connection-level faults, routed to CacheOptions.on_error when configured
CONNECTION_ERRORS = (StoreConnectionError, StoreTimeoutError)


class RCacheError(Exception):
    """Base class for errors raised by RCache."""


class ConstructionError(RCacheError, ValueError):
    """A mandatory constructor input is missing or an option is invalid."""


# Name used by callers of the original library
MissingParameter = ConstructionError


class InvalidParameters(RCacheError, ValueError):
    """Group key parameters do not fit the group key schema."""


class InvalidParameterCount(InvalidParameters):
    """
    Raised when the number of group parameters differs from the schema.

    Attributes:
        expected: Number of fields in the group key schema
        received: Number of parameters supplied
    """

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Invalid number of parameters: expected {expected}, got {received}"
        )


class MissingGroupField(InvalidParameters):
    """Raised when a group schema field is absent from the parameters."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing group parameter: {field_name}")


__all__ = [
    "CONNECTION_ERRORS",
    "ConstructionError",
    "InvalidParameterCount",
    "InvalidParameters",
    "MissingGroupField",
    "MissingParameter",
    "RCacheError",
    "StoreConnectionError",
    "StoreOperationError",
    "StoreTimeoutError",
]

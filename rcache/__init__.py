"""
RCache: Grouped Hash-Map Cache for Redis

Structured, deterministic key naming and group-level TTL expiry for
entities cached in Redis hashes, built on redis.asyncio.
"""

from .cache import CacheOptions, GroupedKeyCache
from .errors import (
    ConstructionError,
    InvalidParameterCount,
    InvalidParameters,
    MissingGroupField,
    MissingParameter,
    RCacheError,
    StoreConnectionError,
    StoreOperationError,
)
from .keys import KeyFormatter, KeySchema, KeyValue
from .network import create_client

__version__ = "1.0.0"

__all__ = [
    "CacheOptions",
    "ConstructionError",
    "GroupedKeyCache",
    "InvalidParameterCount",
    "InvalidParameters",
    "KeyFormatter",
    "KeySchema",
    "KeyValue",
    "MissingGroupField",
    "MissingParameter",
    "RCacheError",
    "StoreConnectionError",
    "StoreOperationError",
    "create_client",
]

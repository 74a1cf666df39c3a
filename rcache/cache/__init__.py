"""Cache module for RCache."""

from .group_cache import GroupedKeyCache
from .options import CacheOptions

__all__ = ["CacheOptions", "GroupedKeyCache"]

"""Key formatting module for RCache."""

from .formatter import KeyFormatter
from .schema import SEPARATOR, WILDCARD, KeySchema, KeyValue

__all__ = [
    "KeyFormatter",
    "KeySchema",
    "KeyValue",
    "SEPARATOR",
    "WILDCARD",
]

"""
Key Schema and Key/Value Definitions

This module defines the data structures the key formatter works with.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Tuple

WILDCARD = "*"
SEPARATOR = ":"


@dataclass(frozen=True)
class KeySchema:
    """
    Ordered, immutable list of field names composing a key.

    Attributes:
        fields: Field names in the order they appear in the formatted key
    """
    fields: Tuple[str, ...]

    @classmethod
    def of(cls, fields: Iterable[str]) -> "KeySchema":
        """Build a schema from any iterable of field names."""
        if isinstance(fields, str):
            # A bare string is one field, not a sequence of characters
            return cls(fields=(fields,))
        return cls(fields=tuple(str(name) for name in fields))

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)


@dataclass(frozen=True)
class KeyValue:
    """
    A formatted entity key paired with the value to store under it.

    Unpacks like a (key, value) tuple so batches can be built from either.

    Attributes:
        key: The formatted entity key
        value: Opaque value, passed to the store as-is
    """
    key: str
    value: Any

    def __iter__(self) -> Iterator[Any]:
        return iter((self.key, self.value))

    def as_dict(self) -> Dict[str, Any]:
        """Return the record as a {"key": ..., "value": ...} mapping."""
        return {"key": self.key, "value": self.value}

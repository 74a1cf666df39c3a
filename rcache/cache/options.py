"""
Cache Options

Per-instance configuration for GroupedKeyCache. Defaults come from the
environment-driven settings, so a deployment can change them without
touching call sites.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..config.settings import settings
from ..errors import ConstructionError

# Option names accepted from callers of the original library
CAMEL_CASE_ALIASES = {
    "TTL": "ttl",
    "entityPrefix": "entity_prefix",
    "entitySuffix": "entity_suffix",
    "scanCount": "scan_count",
    "onError": "on_error",
}


@dataclass(frozen=True)
class CacheOptions:
    """
    Immutable cache configuration.

    Attributes:
        ttl: Seconds a group lives after its most recent write
        prefix: Group key prefix
        suffix: Group key suffix
        entity_prefix: Entity key prefix (omitted when empty)
        entity_suffix: Entity key suffix (omitted when empty)
        scan_count: COUNT hint passed to each HSCAN call
        on_error: Called with store connection errors instead of raising
    """
    ttl: int = field(default_factory=lambda: settings.DEFAULT_TTL)
    prefix: str = field(default_factory=lambda: settings.GROUP_PREFIX)
    suffix: str = field(default_factory=lambda: settings.GROUP_SUFFIX)
    entity_prefix: str = field(default_factory=lambda: settings.ENTITY_PREFIX)
    entity_suffix: str = field(default_factory=lambda: settings.ENTITY_SUFFIX)
    scan_count: int = field(default_factory=lambda: settings.SCAN_COUNT)
    on_error: Optional[Callable[[Exception], Any]] = None

    def __post_init__(self):
        for name in ("ttl", "scan_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConstructionError(f"{name} must be a positive integer, got {value!r}")
        if self.on_error is not None and not callable(self.on_error):
            raise ConstructionError("on_error must be callable")

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None, **overrides: Any) -> "CacheOptions":
        """
        Build options from a mapping using snake_case or camelCase names.

        Args:
            options: Option mapping, e.g. {"TTL": 60, "scanCount": 10}
            **overrides: Applied on top of options

        Raises:
            ConstructionError: On unknown option names or invalid values
        """
        values = _normalize(options or {})
        values.update(_normalize(overrides))
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "CacheOptions":
        """Return a copy with some options replaced."""
        if not overrides:
            return self
        return replace(self, **_normalize(overrides))


def _normalize(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate camelCase names and reject unknown ones."""
    known = {f.name for f in fields(CacheOptions)}
    values = {}
    for name, value in options.items():
        name = CAMEL_CASE_ALIASES.get(name, name)
        if name not in known:
            raise ConstructionError(f"Unknown cache option: {name}")
        values[name] = value
    return values

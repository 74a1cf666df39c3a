"""
Key Formatter Module

Builds deterministic group and entity keys from ordered schemas.

Key formats:
    group body:  <field1>:<value1><field2>:<value2>...   (no separator between fields)
    group key:   <prefix>:<group body>:<suffix>
    entity key:  [<entity_prefix>:]<field1>:<value1>:<field2>:<value2>[:<entity_suffix>]

Entity fields missing from the parameters are written as "*" so the
result can be used as an HSCAN MATCH pattern.
"""

from typing import Any, Iterable, Mapping

from ..errors import InvalidParameterCount, MissingGroupField
from .schema import SEPARATOR, WILDCARD, KeySchema, KeyValue


class KeyFormatter:
    """
    Pure formatter for group and entity keys.

    Usage:
        formatter = KeyFormatter(['tenant'], ['user', 'item'])
        formatter.format_group_key({'tenant': 'acme'})
        # ':tenant:acme:group'
        formatter.format_entity_key({'user': 7})
        # 'user:7:item:*'

    Attributes:
        group_schema: Fields composing the group key
        entity_schema: Fields composing the entity key
    """

    def __init__(
            self,
            group_schema: Iterable[str],
            entity_schema: Iterable[str],
            prefix: str = "",
            suffix: str = "group",
            entity_prefix: str = "",
            entity_suffix: str = "",
    ):
        self.group_schema = group_schema if isinstance(group_schema, KeySchema) else KeySchema.of(group_schema)
        self.entity_schema = entity_schema if isinstance(entity_schema, KeySchema) else KeySchema.of(entity_schema)
        self.prefix = prefix
        self.suffix = suffix
        self.entity_prefix = entity_prefix
        self.entity_suffix = entity_suffix

    def format_group_body(self, params: Mapping[str, Any]) -> str:
        """
        Concatenate "<field>:<value>" for every group field in schema order.

        Args:
            params: Mapping from group field name to value

        Returns:
            The group body, e.g. "groupKey1:value1groupKey2:value2"

        Raises:
            InvalidParameterCount: If len(params) differs from the schema length
            MissingGroupField: If a schema field is not among the parameters
        """
        if len(params) != len(self.group_schema):
            raise InvalidParameterCount(len(self.group_schema), len(params))

        body = ""
        for name in self.group_schema:
            if name not in params:
                raise MissingGroupField(name)
            body += f"{name}{SEPARATOR}{params[name]}"
        return body

    def format_group_key(self, params: Mapping[str, Any]) -> str:
        """Return "<prefix>:<body>:<suffix>" for the given group parameters."""
        body = self.format_group_body(params)
        return f"{self.prefix}{SEPARATOR}{body}{SEPARATOR}{self.suffix}"

    def format_entity_key(self, params: Mapping[str, Any]) -> str:
        """
        Build an entity key, substituting "*" for every missing field.

        Never raises on partial parameters: a partial mapping is how
        search patterns for find() are built.

        Args:
            params: Mapping from entity field name to value (may be partial)

        Returns:
            The entity key or pattern, e.g. "entityKey1:value1:entityKey2:*"
        """
        segments = [self.entity_prefix] if self.entity_prefix else []
        for name in self.entity_schema:
            value = params.get(name)
            segments.append(f"{name}{SEPARATOR}{WILDCARD if value is None else value}")

        if self.entity_suffix:
            segments.append(self.entity_suffix)
        return SEPARATOR.join(segments)

    def format_key_value(self, params: Mapping[str, Any], value: Any) -> KeyValue:
        """Pair format_entity_key(params) with value, ready for a batch write."""
        return KeyValue(key=self.format_entity_key(params), value=value)

    def is_pattern(self, params: Mapping[str, Any]) -> bool:
        """Check whether params leave at least one entity field as a wildcard."""
        return any(params.get(name) is None for name in self.entity_schema)

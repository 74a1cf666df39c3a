"""
Grouped Key Cache Module

Group-scoped hash-map operations against Redis. A group is one Redis hash
addressed by a formatted group key; its fields are formatted entity keys.
Every write resets the group's TTL, so a group and all its entities
expire together.

The client is injected and never owned: several caches may share one
connection pool, and closing it is the caller's job.
"""

import inspect
import logging
from typing import Any, AsyncIterator, Iterable, List, Mapping, Optional, Tuple, Union

from ..errors import CONNECTION_ERRORS, ConstructionError
from ..keys.formatter import KeyFormatter
from ..keys.schema import KeyValue
from .options import CacheOptions

logger = logging.getLogger(__name__)

Entity = Union[KeyValue, Mapping[str, Any], Tuple[str, Any]]


class GroupedKeyCache:
    """
    Redis hash-map cache with structured keys and group-level expiry.

    Features:
    - Deterministic group and entity keys built from ordered schemas
    - Sliding expiration: every write resets the group's TTL
    - Atomic batch writes (MULTI/EXEC with the EXPIRE inside)
    - Pattern search over a group through a cursor-driven HSCAN

    Usage:
        client = create_client()
        cache = GroupedKeyCache(client, ['tenant'], ['user', 'item'], {'TTL': 60})
        group = cache.format_group_key({'tenant': 'acme'})
        await cache.set(group, {'user': 7, 'item': 1}, 'payload')
        values = await cache.find(group, {'user': 7})

    Attributes:
        client: Async Redis client (redis.asyncio.Redis or compatible)
        options: The immutable CacheOptions
        formatter: KeyFormatter built from the schemas and options
    """

    def __init__(
            self,
            client,
            group_key: Iterable[str],
            entity_key: Iterable[str],
            options: Union[CacheOptions, Mapping[str, Any], None] = None,
            **overrides: Any,
    ):
        """
        Initialize the cache.

        Args:
            client: Connected async Redis client
            group_key: Ordered field names composing the group key
            entity_key: Ordered field names composing the entity key
            options: CacheOptions or an option mapping (snake_case or camelCase)
            **overrides: Individual options applied on top of options

        Raises:
            ConstructionError: If client or either schema is missing, or
                an option is unknown or invalid
        """
        if client is None or group_key is None or entity_key is None:
            raise ConstructionError("All parameters must be provided")

        if isinstance(options, CacheOptions):
            self.options = options.with_overrides(**overrides)
        else:
            self.options = CacheOptions.from_mapping(options, **overrides)

        self.client = client
        self.formatter = KeyFormatter(
            group_key,
            entity_key,
            prefix=self.options.prefix,
            suffix=self.options.suffix,
            entity_prefix=self.options.entity_prefix,
            entity_suffix=self.options.entity_suffix,
        )

    @property
    def group_schema(self):
        return self.formatter.group_schema

    @property
    def entity_schema(self):
        return self.formatter.entity_schema

    # ------------------------------------------------------------------
    # Key formatting
    # ------------------------------------------------------------------

    def format_group_body(self, params: Mapping[str, Any]) -> str:
        """See KeyFormatter.format_group_body."""
        return self.formatter.format_group_body(params)

    def format_group_key(self, params: Mapping[str, Any]) -> str:
        """See KeyFormatter.format_group_key."""
        return self.formatter.format_group_key(params)

    def format_entity_key(self, params: Mapping[str, Any]) -> str:
        """See KeyFormatter.format_entity_key."""
        return self.formatter.format_entity_key(params)

    def format_key_value(self, params: Mapping[str, Any], value: Any) -> KeyValue:
        """See KeyFormatter.format_key_value."""
        return self.formatter.format_key_value(params, value)

    # Original library names
    generate_group_body_key = format_group_body
    get_group_key = format_group_key
    get_key = format_entity_key
    get_key_value = format_key_value

    # ------------------------------------------------------------------
    # Store operations
    # ------------------------------------------------------------------

    async def group_exists(self, group_key: str) -> bool:
        """Check whether the group hash exists in the store."""
        try:
            found = await self.client.exists(group_key)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("group_exists", exc)
        return bool(found)

    async def key_exists(self, group_key: str, entity_params: Mapping[str, Any]) -> bool:
        """Check whether one entity is present in the group."""
        key = self._exact_key("key_exists", entity_params)
        try:
            found = await self.client.hexists(group_key, key)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("key_exists", exc)
        return bool(found)

    is_exist = group_exists
    is_group_exists = group_exists
    is_key_exists = key_exists

    async def set(self, group_key: str, entity_params: Mapping[str, Any], value: Any):
        """
        Store one entity and reset the group's TTL.

        Args:
            group_key: Formatted group key
            entity_params: Entity field values
            value: Value to store (str, bytes, int or float)

        Returns:
            The EXPIRE reply (True when the TTL was set)
        """
        key, value = self.format_key_value(entity_params, value)
        logger.debug(f"HSET {group_key} {key} (ttl={self.options.ttl})")
        try:
            await self.client.hset(group_key, key, value)
            return await self.client.expire(group_key, self.options.ttl)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("set", exc)

    async def set_many(self, group_key: str, entities: Iterable[Entity]) -> Optional[List[Any]]:
        """
        Store a batch of entities and reset the TTL in one transaction.

        The HSETs and the EXPIRE are queued on a MULTI/EXEC pipeline, so
        the store applies all of them or none.

        Args:
            group_key: Formatted group key
            entities: KeyValue records, {"key", "value"} mappings or (key, value) pairs

        Returns:
            Pipeline replies: one per HSET, then the EXPIRE reply
        """
        pairs = [_as_pair(entity) for entity in entities]
        logger.debug(f"MULTI {group_key}: {len(pairs)} HSET + EXPIRE {self.options.ttl}")
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                for key, value in pairs:
                    pipe.hset(group_key, key, value)
                pipe.expire(group_key, self.options.ttl)
                return await pipe.execute()
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("set_many", exc)

    set_entities = set_many

    async def size(self, group_key: str) -> int:
        """Return the number of entities in the group."""
        try:
            return await self.client.hlen(group_key)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("size", exc)

    async def get_all(self, group_key: str) -> List[Any]:
        """Return every value in the group, in store order."""
        try:
            return await self.client.hvals(group_key)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("get_all", exc)

    async def get(self, group_key: str, entity_params: Mapping[str, Any]) -> Optional[Any]:
        """Return the value stored for one entity, or None."""
        key = self._exact_key("get", entity_params)
        try:
            return await self.client.hget(group_key, key)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("get", exc)

    async def iter_find(self, group_key: str, entity_params: Mapping[str, Any]) -> AsyncIterator[Any]:
        """
        Yield values whose entity key matches the pattern built from entity_params.

        Missing entity fields become "*". The scan starts at cursor 0 and
        requests pages of scan_count fields until the store hands back
        cursor 0 again. Each call starts a fresh scan.

        Args:
            group_key: Formatted group key
            entity_params: Partial entity field values

        Yields:
            Matched values, page by page
        """
        pattern = self.format_entity_key(entity_params)
        cursor = 0
        pages = 0
        while True:
            try:
                cursor, page = await self.client.hscan(
                    group_key,
                    cursor=cursor,
                    match=pattern,
                    count=self.options.scan_count,
                )
            except CONNECTION_ERRORS as exc:
                await self._on_connection_error("find", exc)
                return
            pages += 1
            for value in page.values():
                yield value
            if int(cursor) == 0:
                break
        logger.debug(f"HSCAN {group_key} MATCH {pattern}: {pages} page(s)")

    async def find(self, group_key: str, entity_params: Mapping[str, Any]) -> List[Any]:
        """Collect every value iter_find() yields."""
        return [value async for value in self.iter_find(group_key, entity_params)]

    async def delete(self, group_key: str, entity_params: Mapping[str, Any]) -> int:
        """
        Remove one entity from the group.

        Returns:
            Number of fields removed: 1, or 0 when the entity was absent
        """
        key = self._exact_key("delete", entity_params)
        try:
            return await self.client.hdel(group_key, key)
        except CONNECTION_ERRORS as exc:
            return await self._on_connection_error("delete", exc)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _exact_key(self, operation: str, entity_params: Mapping[str, Any]) -> str:
        """Format an entity key for an operation that addresses one field."""
        if self.formatter.is_pattern(entity_params):
            # Redis treats "*" literally outside HSCAN MATCH
            logger.warning(f"{operation}: entity key has wildcard fields, matching literally")
        return self.format_entity_key(entity_params)

    async def _on_connection_error(self, operation: str, exc: Exception):
        """
        Route a connection-level store error.

        Re-raises when no on_error callback is configured; otherwise
        returns the callback's result (awaited if it is a coroutine).
        """
        if self.options.on_error is None:
            logger.error(f"Store connection error during {operation}: {exc}")
            raise exc

        logger.warning(f"Store connection error during {operation}, routed to on_error: {exc}")
        result = self.options.on_error(exc)
        if inspect.isawaitable(result):
            result = await result
        return result


def _as_pair(entity: Entity) -> Tuple[str, Any]:
    """Accept a KeyValue, a {"key", "value"} mapping or a (key, value) pair."""
    if isinstance(entity, Mapping):
        return entity["key"], entity["value"]
    key, value = entity
    return key, value

"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
"""

import os
from fnmatch import fnmatchcase
from typing import Any, AsyncGenerator, Dict, List, Tuple
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from rcache.cache.group_cache import GroupedKeyCache
from rcache.keys.formatter import KeyFormatter


# ============================================================================
# In-memory hash store
# ============================================================================

class FakeHashStore:
    """
    Async in-memory stand-in for the hash commands GroupedKeyCache uses.

    Keeps hashes in plain dicts, records every command in `calls`, and
    pages HSCAN results by the COUNT hint so cursor handling is exercised.
    TTLs are recorded in `ttls` but never enforced.
    """

    def __init__(self):
        self.hashes: Dict[str, Dict[str, Any]] = {}
        self.ttls: Dict[str, int] = {}
        self.calls: List[Tuple] = []
        self.pipelines: List["FakePipeline"] = []

    async def exists(self, *names: str) -> int:
        self.calls.append(("exists", *names))
        return sum(1 for name in names if self.hashes.get(name))

    async def hset(self, name: str, key: str, value: Any) -> int:
        self.calls.append(("hset", name, key, value))
        return self._hset(name, key, value)

    async def hget(self, name: str, key: str):
        self.calls.append(("hget", name, key))
        return self.hashes.get(name, {}).get(key)

    async def hexists(self, name: str, key: str) -> bool:
        self.calls.append(("hexists", name, key))
        return key in self.hashes.get(name, {})

    async def hdel(self, name: str, *keys: str) -> int:
        self.calls.append(("hdel", name, *keys))
        fields = self.hashes.get(name, {})
        removed = sum(1 for key in keys if fields.pop(key, None) is not None)
        if name in self.hashes and not fields:
            del self.hashes[name]
        return removed

    async def hlen(self, name: str) -> int:
        self.calls.append(("hlen", name))
        return len(self.hashes.get(name, {}))

    async def hvals(self, name: str) -> List[Any]:
        self.calls.append(("hvals", name))
        return list(self.hashes.get(name, {}).values())

    async def hscan(self, name: str, cursor: int = 0, match: str = None, count: int = None):
        self.calls.append(("hscan", name, cursor, match, count))
        items = list(self.hashes.get(name, {}).items())
        count = count or 10
        page = items[cursor:cursor + count]
        next_cursor = cursor + count if cursor + count < len(items) else 0
        matched = {k: v for k, v in page if match is None or fnmatchcase(k, match)}
        return next_cursor, matched

    async def expire(self, name: str, seconds: int) -> bool:
        self.calls.append(("expire", name, seconds))
        return self._expire(name, seconds)

    def pipeline(self, transaction: bool = True) -> "FakePipeline":
        pipe = FakePipeline(self, transaction)
        self.pipelines.append(pipe)
        return pipe

    def _hset(self, name: str, key: str, value: Any) -> int:
        fields = self.hashes.setdefault(name, {})
        added = 0 if key in fields else 1
        fields[key] = value
        return added

    def _expire(self, name: str, seconds: int) -> bool:
        if name not in self.hashes:
            return False
        self.ttls[name] = seconds
        return True


class FakePipeline:
    """Buffers commands and applies them together on execute()."""

    def __init__(self, store: FakeHashStore, transaction: bool):
        self.store = store
        self.transaction = transaction
        self.queued: List[Tuple] = []
        self.executed = False
        self.sent: List[Tuple] = []

    def hset(self, name: str, key: str, value: Any) -> "FakePipeline":
        self.queued.append(("hset", name, key, value))
        return self

    def expire(self, name: str, seconds: int) -> "FakePipeline":
        self.queued.append(("expire", name, seconds))
        return self

    async def execute(self) -> List[Any]:
        self.executed = True
        self.sent = list(self.queued)
        results = []
        for command, *args in self.queued:
            if command == "hset":
                results.append(self.store._hset(*args))
            else:
                results.append(self.store._expire(*args))
        return results

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.queued = []


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def fake_store() -> FakeHashStore:
    """Create an empty in-memory hash store."""
    return FakeHashStore()


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create an AsyncMock client for checking the exact commands sent."""
    client = AsyncMock()
    client.expire.return_value = True
    return client


# ============================================================================
# Cache Fixtures
# ============================================================================

@pytest.fixture
def formatter() -> KeyFormatter:
    """Two-field group schema, two-field entity schema, default decoration."""
    return KeyFormatter(['groupKey1', 'groupKey2'], ['entityKey1', 'entityKey2'])


@pytest.fixture
def cache(fake_store: FakeHashStore) -> GroupedKeyCache:
    """Cache over the in-memory store with a 60 second TTL."""
    return GroupedKeyCache(
        fake_store,
        ['groupKey1', 'groupKey2'],
        ['entityKey1', 'entityKey2'],
        {'TTL': 60},
    )


@pytest.fixture
def small_scan_cache(fake_store: FakeHashStore) -> GroupedKeyCache:
    """Cache scanning 2 fields per HSCAN page, to force multi-page scans."""
    return GroupedKeyCache(fake_store, ['tenant'], ['user', 'item'], scan_count=2)


@pytest.fixture
def single_key_cache(mock_client: AsyncMock) -> GroupedKeyCache:
    """Single-field schemas over the mock client."""
    return GroupedKeyCache(mock_client, ['groupKey'], ['entityKey'], {'TTL': 60})


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[Any, None]:
    """
    Connect to the Redis at RCACHE_REDIS_URL, or skip the test.

    Keys written by a test are removed afterwards by the test itself
    through its own group keys.
    """
    url = os.environ.get("RCACHE_REDIS_URL")
    if not url:
        pytest.skip("RCACHE_REDIS_URL not set")

    from rcache.network.connection import create_client

    client = create_client(url=url)
    yield client
    await client.aclose()


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (need RCACHE_REDIS_URL)"
    )

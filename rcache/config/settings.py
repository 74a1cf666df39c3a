"""
RCache Configuration Settings

This module contains the environment-driven defaults used by RCache.
Every value can be overridden per cache instance through CacheOptions.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Library configuration settings."""

    # Connection settings
    REDIS_URL: str = os.environ.get("RCACHE_REDIS_URL", "")
    REDIS_HOST: str = os.environ.get("RCACHE_REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.environ.get("RCACHE_REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.environ.get("RCACHE_REDIS_DB", "0"))
    REDIS_PASSWORD: Optional[str] = os.environ.get("RCACHE_REDIS_PASSWORD") or None
    SOCKET_TIMEOUT: float = float(os.environ.get("RCACHE_SOCKET_TIMEOUT", "5"))

    # TTL settings
    DEFAULT_TTL: int = int(os.environ.get("RCACHE_DEFAULT_TTL", "3600"))  # 1 hour

    # Key decoration
    GROUP_PREFIX: str = os.environ.get("RCACHE_GROUP_PREFIX", "")
    GROUP_SUFFIX: str = os.environ.get("RCACHE_GROUP_SUFFIX", "group")
    ENTITY_PREFIX: str = os.environ.get("RCACHE_ENTITY_PREFIX", "")
    ENTITY_SUFFIX: str = os.environ.get("RCACHE_ENTITY_SUFFIX", "")

    # Scan settings
    SCAN_COUNT: int = int(os.environ.get("RCACHE_SCAN_COUNT", "100"))

    # Logging settings
    DEBUG: bool = os.environ.get("RCACHE_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("RCACHE_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()

"""
Redis Connection Module

Builds the async Redis client a GroupedKeyCache is given. Creating the
client does not open a connection; the first command does.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from ..config.settings import settings

logger = logging.getLogger(__name__)


def create_client(
        url: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        db: Optional[int] = None,
        password: Optional[str] = None,
        decode_responses: bool = True,
) -> redis.Redis:
    """
    Create an async Redis client from arguments or settings.

    A URL (argument or RCACHE_REDIS_URL) takes precedence over
    host/port/db/password.

    Args:
        url: redis:// or rediss:// URL
        host: Server host (default from settings.REDIS_HOST)
        port: Server port (default from settings.REDIS_PORT)
        db: Database number (default from settings.REDIS_DB)
        password: Password (default from settings.REDIS_PASSWORD)
        decode_responses: Return str instead of bytes

    Returns:
        A redis.asyncio.Redis instance
    """
    url = url if url is not None else settings.REDIS_URL
    options = {
        "socket_connect_timeout": settings.SOCKET_TIMEOUT,
        "socket_timeout": settings.SOCKET_TIMEOUT,
    }

    if url:
        logger.debug("Creating Redis client from URL")
        return redis.Redis.from_url(url, decode_responses=decode_responses, **options)

    host = host if host is not None else settings.REDIS_HOST
    port = port if port is not None else settings.REDIS_PORT
    db = db if db is not None else settings.REDIS_DB
    password = password if password is not None else settings.REDIS_PASSWORD

    logger.debug(f"Creating Redis client for {host}:{port}/{db}")
    return redis.Redis(
        host=host,
        port=port,
        db=db,
        password=password,
        decode_responses=decode_responses,
        **options,
    )

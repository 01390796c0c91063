"""
Redis connection management.
Handles the async connection pool and client used by the application.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from priority_queue.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Application-wide client, owned by the API lifespan
_client: redis.Redis | None = None


def create_redis_client(settings: Settings | None = None) -> redis.Redis:
    """
    Create an async Redis client backed by its own connection pool.

    Args:
        settings: Connection settings. Defaults to the cached application settings.

    Returns:
        redis.Redis: A client decoding responses to str.
    """
    settings = settings or get_settings()
    pool = redis.ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout_seconds,
        socket_connect_timeout=settings.redis_socket_connect_timeout_seconds,
        decode_responses=True,
    )
    # The client owns the pool, so aclose() also disconnects it
    return redis.Redis.from_pool(pool)


async def init_store(settings: Settings | None = None) -> redis.Redis:
    """
    Create the application client and verify the server answers PING.
    Should be called on application startup.

    Raises:
        RedisError: If the server cannot be reached.
    """
    global _client
    if _client is None:
        client = create_redis_client(settings)
        try:
            await client.ping()
        except RedisError:
            await client.aclose()
            logger.error("Redis connection failed")
            raise
        _client = client
        logger.info("Redis connection initialized")
    return _client


async def close_store() -> None:
    """
    Close the application client and its pool.
    Should be called on application shutdown.
    """
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("Redis connection closed")


def get_redis() -> redis.Redis:
    """
    Get the application client.

    Raises:
        RuntimeError: If the store is not initialized.
    """
    if _client is None:
        raise RuntimeError("Store not initialized. Call init_store() first.")
    return _client


async def ping_store(client: redis.Redis) -> bool:
    """Return True if the server answers PING."""
    try:
        return bool(await client.ping())
    except RedisError:
        logger.warning("Redis ping failed")
        return False

"""
Redis cache configuration and utilities.

This module provides a Redis connection pool and the small set of cache
helpers the credential store uses for public user records. Read errors are
raised to the caller; write and delete errors are logged and reported as
``False`` so a cache outage never fails a request.
"""

from typing import Any, Optional
import json
import logging
from contextlib import contextmanager
from redis import Redis, ConnectionPool, ConnectionError, RedisError, TimeoutError
from redis.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ResponseError, DataError

from .config import settings

# Configure logging
logger = logging.getLogger(__name__)

# Redis connection retry strategy
retry_strategy = Retry(
    ExponentialBackoff(
        cap=2,  # Maximum backoff time in seconds
        base=0.1  # Base multiplier for backoff
    ),
    retries=2,
    supported_errors=(
        ConnectionError,
        TimeoutError
    )
)

def check_redis_health() -> bool:
    """
    Check Redis connection health.

    Returns:
        bool: True if Redis is healthy, False otherwise
    """
    try:
        with get_redis_client() as client:
            return bool(client.ping())
    except RedisError as e:
        logger.error(f"Redis health check failed: {e}")
        return False

# Create Redis connection pool; no connection is opened until first use
redis_pool = ConnectionPool(
    host=settings.REDIS_HOST,
    port=settings.REDIS_PORT,
    db=settings.REDIS_DB,
    decode_responses=True,
    max_connections=10,
    socket_timeout=2,
    socket_connect_timeout=2,
    health_check_interval=30
)

@contextmanager
def get_redis_client() -> Redis:
    """
    Get Redis client instance with automatic connection management.

    Yields:
        Redis: Redis client instance

    Raises:
        RedisError: If connection fails
    """
    client = None
    try:
        client = Redis(
            connection_pool=redis_pool,
            retry=retry_strategy
        )
        yield client
    except (ConnectionError, TimeoutError) as e:
        logger.error(f"Redis connection error: {e}")
        raise
    except (ResponseError, DataError) as e:
        logger.error(f"Redis command error: {e}")
        raise
    finally:
        if client:
            client.close()

def serialize_value(value: Any) -> str:
    """
    Serialize value to JSON string.

    Raises:
        ValueError: If value cannot be serialized
    """
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize value: {e}")
        raise ValueError(f"Could not serialize value: {e}")

def deserialize_value(value: str) -> Any:
    """
    Deserialize JSON string to value.

    Raises:
        ValueError: If value cannot be deserialized
    """
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to deserialize value: {e}")
        raise ValueError(f"Could not deserialize value: {e}")

# PUBLIC_INTERFACE
def cache_get(key: str) -> Optional[Any]:
    """
    Get value from cache.

    Args:
        key: Cache key

    Returns:
        Any: Cached value or None if not found

    Raises:
        RedisError: If Redis operation fails
        ValueError: If the stored value is not valid JSON
    """
    with get_redis_client() as client:
        try:
            value = client.get(key)
            return deserialize_value(value) if value else None
        except RedisError as e:
            logger.error(f"Failed to get cache key {key}: {e}")
            raise

# PUBLIC_INTERFACE
def cache_set(key: str, value: Any, expire: int = 3600) -> bool:
    """
    Set value in cache.

    Args:
        key: Cache key
        value: Value to cache
        expire: Expiration time in seconds (default: 1 hour)

    Returns:
        bool: True if successful, False otherwise
    """
    try:
        with get_redis_client() as client:
            serialized = serialize_value(value)
            return bool(client.setex(key, expire, serialized))
    except (RedisError, ValueError) as e:
        logger.error(f"Failed to set cache key {key}: {e}")
        return False

# PUBLIC_INTERFACE
def cache_delete(*keys: str) -> bool:
    """
    Delete one or more keys from cache.

    Returns:
        bool: True if the command succeeded (even when no key existed),
        False on a Redis error
    """
    if not keys:
        return True
    try:
        with get_redis_client() as client:
            client.delete(*keys)
            return True
    except RedisError as e:
        logger.error(f"Failed to delete cache keys {keys}: {e}")
        return False

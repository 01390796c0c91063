"""
Store module.
Contains the Redis connection management and the queue service.
"""

from priority_queue.store.connection import (
    close_store,
    create_redis_client,
    get_redis,
    init_store,
    ping_store,
)
from priority_queue.store.service import QueueService

__all__ = [
    "create_redis_client",
    "init_store",
    "close_store",
    "get_redis",
    "ping_store",
    "QueueService",
]

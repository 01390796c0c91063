"""
Queue service over Redis sorted sets.
Implements the queue operations and the dequeue audit.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import redis.asyncio as redis
from redis.exceptions import RedisError

from priority_queue.constants import (
    DEQUEUE_KEY,
    QUEUE_KEY,
    RELEASE_FLAG_VALUE,
    RELEASE_KEY,
    SPAN_PREFIX,
    DequeueMode,
)
from priority_queue.errors import MemberNotFoundError, QueueEmptyError, StoreUnavailableError
from priority_queue.observability.logging import queue_context
from priority_queue.observability.metrics import MetricsCollector, get_metrics
from priority_queue.observability.tracing import get_tracer
from priority_queue.store.connection import ping_store
from priority_queue.store.scripts import RANKED_DEQUEUE_SCRIPT, RELEASE_ALL_SCRIPT
from priority_queue.types.queue import (
    DeleteRequest,
    DequeueRequest,
    DequeueResult,
    EnqueueRequest,
    MemberRef,
    PositionRequest,
    QueueRef,
    SetPriorityRequest,
)

logger = logging.getLogger(__name__)


class QueueService:
    """
    Priority queue operations backed by one Redis client.

    Per queue the service keeps three keys:
    - ``queue:<id>``: sorted set of members, lowest score dequeued first.
      Members with equal scores are ordered lexicographically by member id.
    - ``release:<id>``: flag set when the whole queue is released or cleared.
    - ``dequeue:<id>``: set of members removed by single and first-N dequeues.

    The service holds no queue state of its own and is safe to share across
    tasks. Dequeues run as Lua scripts and clear runs as one MULTI/EXEC
    transaction, so a read and its remove are never interleaved with other
    commands on the same queue.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        *,
        key_prefix: str = "",
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the service.

        Args:
            redis_client: Async Redis client created with ``decode_responses=True``.
            key_prefix: Prefix prepended to every key the service touches.
            metrics: Metrics collector. Defaults to the application collector.

        Raises:
            ValueError: If no client is given.
        """
        if redis_client is None:
            raise ValueError("redis client is required")

        self._redis = redis_client
        self._key_prefix = key_prefix
        self._metrics = metrics or get_metrics()
        self._ranked_dequeue = redis_client.register_script(RANKED_DEQUEUE_SCRIPT)
        self._release_all = redis_client.register_script(RELEASE_ALL_SCRIPT)

    def queue_key(self, queue_id: str) -> str:
        """Key of the queue's live ordering."""
        return self._key_prefix + QUEUE_KEY.format(queue_id=queue_id)

    def release_key(self, queue_id: str) -> str:
        """Key of the queue's release flag."""
        return self._key_prefix + RELEASE_KEY.format(queue_id=queue_id)

    def dequeue_key(self, queue_id: str) -> str:
        """Key of the queue's audit set."""
        return self._key_prefix + DEQUEUE_KEY.format(queue_id=queue_id)

    @asynccontextmanager
    async def _operation(self, operation: str, queue_id: str) -> AsyncIterator[None]:
        """
        Run store calls for one operation inside a span and a log context.

        Redis failures are counted, logged and re-raised as StoreUnavailableError.
        """
        tracer = get_tracer()
        with (
            tracer.start_as_current_span(f"{SPAN_PREFIX}.{operation}") as span,
            queue_context(operation, queue_id),
        ):
            span.set_attribute("queue.id", queue_id)
            try:
                yield
            except RedisError as exc:
                self._metrics.record_store_error(operation)
                logger.error(
                    "Store call failed",
                    extra={"error_type": type(exc).__name__},
                    exc_info=True,
                )
                raise StoreUnavailableError(operation, queue_id) from exc

    async def enqueue(self, request: EnqueueRequest) -> None:
        """
        Add a member to a queue or move it to a new score.

        Inserts and repositions are indistinguishable to the caller; repeating
        the same (member, score) pair changes nothing.

        Raises:
            StoreUnavailableError: If the store call fails.
        """
        await self._upsert("enqueue", request.queue_id, request.member_id, request.score)

    async def set_priority(self, request: SetPriorityRequest) -> None:
        """
        Set or update a member's score.

        Same effect as enqueue: absent members are added.

        Raises:
            StoreUnavailableError: If the store call fails.
        """
        await self._upsert("set_priority", request.queue_id, request.member_id, request.score)

    async def _upsert(self, operation: str, queue_id: str, member_id: str, score: float) -> None:
        async with self._operation(operation, queue_id):
            await self._redis.zadd(self.queue_key(queue_id), {member_id: score})

        self._metrics.record_upsert(queue_id, operation)
        logger.debug(
            "Upserted member",
            extra={"member_id": member_id, "score": score},
        )

    async def dequeue(self, request: DequeueRequest) -> DequeueResult:
        """
        Remove members from the front of a queue.

        RELEASE_ALL removes every member and sets the release flag. FIRST_N
        removes up to ``count`` members and SINGLE removes one; both record the
        removed members in the audit set. Dequeuing an empty queue returns an
        empty result and writes nothing, not even the release flag.

        Returns:
            DequeueResult with the removed members, lowest score first.

        Raises:
            StoreUnavailableError: If a store call fails.
        """
        if request.mode == DequeueMode.RELEASE_ALL:
            members = await self._release("dequeue", request.queue_id, force=False)
        else:
            async with self._operation("dequeue", request.queue_id):
                members = await self._ranked_dequeue(
                    keys=[
                        self.queue_key(request.queue_id),
                        self.dequeue_key(request.queue_id),
                    ],
                    args=[request.batch_size],
                )
            members = list(members or [])

        self._metrics.record_dequeued(request.queue_id, request.mode.value, len(members))
        if members:
            logger.info(
                "Dequeued members",
                extra={"mode": request.mode.value, "count": len(members)},
            )

        return DequeueResult(queue_id=request.queue_id, mode=request.mode, members=members)

    async def clear(self, queue_id: str) -> None:
        """
        Release every member of a queue without returning them.

        Idempotent: clearing an empty or already cleared queue only re-asserts
        the release flag.

        Raises:
            InvalidRequestError: If queue_id is empty.
            StoreUnavailableError: If the store call fails.
        """
        ref = QueueRef.create(queue_id=queue_id)
        members = await self._release("clear", ref.queue_id, force=True)
        self._metrics.record_dequeued(ref.queue_id, DequeueMode.RELEASE_ALL.value, len(members))

    async def _release(self, operation: str, queue_id: str, *, force: bool) -> list[str]:
        """
        Read and remove the whole ordering and set the release flag atomically.

        With ``force`` the flag is set even when the queue is empty. Without
        it an empty queue is left untouched, so members enqueued later are not
        reported as dequeued.

        Returns:
            The removed members, lowest score first.
        """
        queue_key = self.queue_key(queue_id)
        release_key = self.release_key(queue_id)

        async with self._operation(operation, queue_id):
            if force:
                async with self._redis.pipeline(transaction=True) as pipe:
                    pipe.zrange(queue_key, 0, -1)
                    pipe.zremrangebyscore(queue_key, "-inf", "+inf")
                    pipe.set(release_key, RELEASE_FLAG_VALUE)
                    members, _, _ = await pipe.execute()
            else:
                members = await self._release_all(
                    keys=[queue_key, release_key],
                    args=[RELEASE_FLAG_VALUE],
                )

        members = list(members or [])
        self._metrics.update_queue_depth(queue_id, 0)
        if members or force:
            logger.info("Released queue", extra={"count": len(members)})
        return members

    async def peek(self, queue_id: str) -> str:
        """
        Return the highest-priority member without removing it.

        Raises:
            InvalidRequestError: If queue_id is empty.
            QueueEmptyError: If the queue has no members.
            StoreUnavailableError: If the store call fails.
        """
        ref = QueueRef.create(queue_id=queue_id)

        async with self._operation("peek", ref.queue_id):
            members = await self._redis.zrange(self.queue_key(ref.queue_id), 0, 0)

        if not members:
            raise QueueEmptyError("peek", ref.queue_id)
        return members[0]

    async def get_position(self, request: PositionRequest) -> int:
        """
        Return a member's zero-based rank, 0 being the next to be dequeued.

        Raises:
            QueueEmptyError: If the queue has no members.
            MemberNotFoundError: If the member is not in the queue.
            StoreUnavailableError: If the store call fails.
        """
        queue_key = self.queue_key(request.queue_id)

        async with self._operation("get_position", request.queue_id):
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.zcard(queue_key)
                pipe.zrank(queue_key, request.member_id)
                count, rank = await pipe.execute()

        self._metrics.update_queue_depth(request.queue_id, count)
        if count == 0:
            raise QueueEmptyError("get_position", request.queue_id)
        if rank is None:
            raise MemberNotFoundError(request.queue_id, request.member_id)
        return int(rank)

    async def delete(self, request: DeleteRequest) -> None:
        """
        Remove a member from a queue if present.

        Deletion is cancellation: no audit record is written, so is_dequeued
        stays False unless the queue was released.

        Raises:
            StoreUnavailableError: If the store call fails.
        """
        async with self._operation("delete", request.queue_id):
            removed = await self._redis.zrem(self.queue_key(request.queue_id), request.member_id)

        self._metrics.record_deleted(request.queue_id, removed)
        logger.debug(
            "Deleted member",
            extra={"member_id": request.member_id, "removed": bool(removed)},
        )

    async def is_dequeued(self, queue_id: str, member_id: str) -> bool:
        """
        Check whether a member has left the queue through a dequeue.

        True if the queue has been released, otherwise whether the member was
        removed by a single or first-N dequeue. Members that were never
        enqueued, or were deleted, give False.

        Raises:
            InvalidRequestError: If either identifier is empty.
            StoreUnavailableError: If the store call fails.
        """
        ref = MemberRef.create(queue_id=queue_id, member_id=member_id)

        async with self._operation("is_dequeued", ref.queue_id):
            if await self._redis.exists(self.release_key(ref.queue_id)):
                return True
            return bool(await self._redis.sismember(self.dequeue_key(ref.queue_id), ref.member_id))

    async def size(self, queue_id: str) -> int:
        """
        Return the number of members in the queue's live ordering.

        Raises:
            InvalidRequestError: If queue_id is empty.
            StoreUnavailableError: If the store call fails.
        """
        ref = QueueRef.create(queue_id=queue_id)

        async with self._operation("size", ref.queue_id):
            count = await self._redis.zcard(self.queue_key(ref.queue_id))

        self._metrics.update_queue_depth(ref.queue_id, count)
        return int(count)

    async def ping(self) -> bool:
        """Return True if the store answers PING."""
        return await ping_store(self._redis)

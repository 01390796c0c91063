"""
Queue operation routes.
"""

import logging

from fastapi import APIRouter, Response, status

from priority_queue.api.dependencies import QueueServiceDep
from priority_queue.constants import API_V1_PREFIX
from priority_queue.types.api import (
    DequeueBody,
    DequeuedResponse,
    DequeueResponse,
    EnqueueBody,
    PeekResponse,
    PositionResponse,
    QueueSizeResponse,
    SetPriorityBody,
)
from priority_queue.types.queue import (
    DeleteRequest,
    DequeueRequest,
    EnqueueRequest,
    PositionRequest,
    SetPriorityRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{API_V1_PREFIX}/queues", tags=["Queues"])


@router.post(
    "/{queue_id}/members",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Enqueue a member",
    description="Add a member with a priority score, or move an existing member to the new score.",
)
async def enqueue(queue_id: str, body: EnqueueBody, service: QueueServiceDep) -> Response:
    """
    Enqueue a member.

    Args:
        queue_id: The queue identifier.
        body: Member and score.
        service: Queue service.
    """
    request = EnqueueRequest.create(queue_id=queue_id, member_id=body.member_id, score=body.score)
    await service.enqueue(request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/{queue_id}/members/{member_id}/priority",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Set member priority",
    description="Set or update the priority score of a member.",
)
async def set_priority(
    queue_id: str,
    member_id: str,
    body: SetPriorityBody,
    service: QueueServiceDep,
) -> Response:
    """Set a member's priority score."""
    request = SetPriorityRequest.create(queue_id=queue_id, member_id=member_id, score=body.score)
    await service.set_priority(request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{queue_id}/members/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a member",
    description="Remove a member without recording it as dequeued. Absent members are ignored.",
)
async def delete_member(queue_id: str, member_id: str, service: QueueServiceDep) -> Response:
    """Delete a member from a queue."""
    await service.delete(DeleteRequest.create(queue_id=queue_id, member_id=member_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{queue_id}/members/{member_id}/position",
    response_model=PositionResponse,
    summary="Get member position",
    description="Get the zero-based rank of a member; 0 is the next member to be dequeued.",
)
async def get_position(queue_id: str, member_id: str, service: QueueServiceDep) -> PositionResponse:
    """
    Get a member's position.

    Returns 404 when the queue is empty or the member is not in it.
    """
    position = await service.get_position(
        PositionRequest.create(queue_id=queue_id, member_id=member_id)
    )
    return PositionResponse(queue_id=queue_id, member_id=member_id, position=position)


@router.get(
    "/{queue_id}/members/{member_id}/dequeued",
    response_model=DequeuedResponse,
    summary="Check if dequeued",
    description="Check whether a member has left the queue through a dequeue or release.",
)
async def is_dequeued(queue_id: str, member_id: str, service: QueueServiceDep) -> DequeuedResponse:
    """Answer the dequeue audit for a member."""
    dequeued = await service.is_dequeued(queue_id, member_id)
    return DequeuedResponse(queue_id=queue_id, member_id=member_id, dequeued=dequeued)


@router.post(
    "/{queue_id}/dequeue",
    response_model=DequeueResponse,
    summary="Dequeue members",
    description="Remove one member, the first N members, or every member of a queue.",
)
async def dequeue(
    queue_id: str,
    service: QueueServiceDep,
    body: DequeueBody | None = None,
) -> DequeueResponse:
    """
    Dequeue members, highest priority first.

    An empty queue yields an empty member list.
    """
    body = body or DequeueBody()
    result = await service.dequeue(
        DequeueRequest.create(queue_id=queue_id, mode=body.mode, count=body.count)
    )
    return DequeueResponse(queue_id=result.queue_id, mode=result.mode, members=result.members)


@router.get(
    "/{queue_id}/peek",
    response_model=PeekResponse,
    summary="Peek at the queue",
    description="Get the highest-priority member without removing it.",
)
async def peek(queue_id: str, service: QueueServiceDep) -> PeekResponse:
    """Peek at the next member. Returns 404 on an empty queue."""
    member_id = await service.peek(queue_id)
    return PeekResponse(queue_id=queue_id, member_id=member_id)


@router.get(
    "/{queue_id}",
    response_model=QueueSizeResponse,
    summary="Get queue size",
    description="Get the number of members in the queue.",
)
async def get_size(queue_id: str, service: QueueServiceDep) -> QueueSizeResponse:
    """Get the size of a queue."""
    return QueueSizeResponse(queue_id=queue_id, size=await service.size(queue_id))


@router.delete(
    "/{queue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear a queue",
    description="Release every member of the queue; all of them then count as dequeued.",
)
async def clear(queue_id: str, service: QueueServiceDep) -> Response:
    """Clear a queue."""
    await service.clear(queue_id)
    logger.info("Queue cleared via API", extra={"queue_id": queue_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)

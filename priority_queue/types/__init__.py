"""
Type definitions for the priority queue.
Contains request/result models for the queue service and the HTTP API.
"""

from priority_queue.types.api import (
    DequeueBody,
    DequeuedResponse,
    DequeueResponse,
    EnqueueBody,
    ErrorResponse,
    HealthResponse,
    PeekResponse,
    PositionResponse,
    QueueSizeResponse,
    SetPriorityBody,
)
from priority_queue.types.queue import (
    DeleteRequest,
    DequeueRequest,
    DequeueResult,
    EnqueueRequest,
    MemberRef,
    PositionRequest,
    QueueRef,
    QueueRequest,
    SetPriorityRequest,
)

__all__ = [
    # Queue types
    "QueueRequest",
    "QueueRef",
    "MemberRef",
    "EnqueueRequest",
    "SetPriorityRequest",
    "DequeueRequest",
    "PositionRequest",
    "DeleteRequest",
    "DequeueResult",
    # API types
    "EnqueueBody",
    "SetPriorityBody",
    "DequeueBody",
    "DequeueResponse",
    "PeekResponse",
    "PositionResponse",
    "DequeuedResponse",
    "QueueSizeResponse",
    "HealthResponse",
    "ErrorResponse",
]

"""
API request and response type definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from priority_queue.constants import DequeueMode


class EnqueueBody(BaseModel):
    """Request body for enqueuing a member."""

    member_id: str = Field(..., description="Member identifier")
    score: float = Field(..., description="Priority score (lower is dequeued first)")


class SetPriorityBody(BaseModel):
    """Request body for changing a member's priority."""

    score: float = Field(..., description="New priority score")


class DequeueBody(BaseModel):
    """Request body for dequeuing members."""

    mode: DequeueMode = Field(default=DequeueMode.SINGLE, description="Dequeue behavior")
    count: int = Field(default=1, description="Members to dequeue in first_n mode")


class DequeueResponse(BaseModel):
    """Members removed by a dequeue."""

    queue_id: str
    mode: DequeueMode
    members: list[str]


class PeekResponse(BaseModel):
    """Highest-priority member of a queue."""

    queue_id: str
    member_id: str


class PositionResponse(BaseModel):
    """Zero-based rank of a member."""

    queue_id: str
    member_id: str
    position: int


class DequeuedResponse(BaseModel):
    """Dequeue audit answer for a member."""

    queue_id: str
    member_id: str
    dequeued: bool


class QueueSizeResponse(BaseModel):
    """Number of members in a queue's live ordering."""

    queue_id: str
    size: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    redis: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: str | None = None

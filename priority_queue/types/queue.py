"""
Queue request and result type definitions.

Each operation takes one frozen request model. Identifiers must be non-empty
and scores finite; construction reports violations as InvalidRequestError.
"""

from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from priority_queue.constants import DequeueMode
from priority_queue.errors import InvalidRequestError

QueueID = Annotated[str, Field(min_length=1, description="Queue identifier")]
MemberID = Annotated[str, Field(min_length=1, description="Member identifier")]
Score = Annotated[
    float,
    Field(allow_inf_nan=False, description="Priority score (lower is dequeued first)"),
]


class QueueRequest(BaseModel):
    """Base class for queue requests."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, /, **data: Any) -> None:
        """
        Validate a request.

        Raises:
            InvalidRequestError: If any field is missing or malformed.
        """
        try:
            super().__init__(**data)
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(loc) for loc in err["loc"]) or "request"
                for err in exc.errors()
            )
            raise InvalidRequestError(
                f"invalid {type(self).__name__}: {fields}",
                errors=exc.errors(include_url=False),
            ) from exc

    @classmethod
    def create(cls, **data: Any) -> Self:
        """
        Build and validate a request.

        Raises:
            InvalidRequestError: If any field is missing or malformed.
        """
        return cls(**data)


class QueueRef(QueueRequest):
    """Reference to a whole queue (peek, size, clear)."""

    queue_id: QueueID


class MemberRef(QueueRequest):
    """Reference to one member of a queue (is-dequeued audit)."""

    queue_id: QueueID
    member_id: MemberID


class EnqueueRequest(QueueRequest):
    """Add a member to a queue, or move it to a new score."""

    queue_id: QueueID
    member_id: MemberID
    score: Score


class SetPriorityRequest(QueueRequest):
    """Set or update a member's score."""

    queue_id: QueueID
    member_id: MemberID
    score: Score


class DequeueRequest(QueueRequest):
    """
    Remove members from the front of a queue.

    ``count`` only applies to FIRST_N; a FIRST_N request with a count of 0 or 1
    behaves like SINGLE.
    """

    queue_id: QueueID
    mode: DequeueMode = DequeueMode.SINGLE
    count: int = Field(default=1, ge=0, description="Members to dequeue in FIRST_N mode")

    @property
    def batch_size(self) -> int:
        """Number of members a ranked dequeue removes."""
        if self.mode == DequeueMode.FIRST_N and self.count > 1:
            return self.count
        return 1


class PositionRequest(QueueRequest):
    """Look up a member's zero-based rank."""

    queue_id: QueueID
    member_id: MemberID


class DeleteRequest(QueueRequest):
    """Remove a member without recording it as dequeued."""

    queue_id: QueueID
    member_id: MemberID


class DequeueResult(BaseModel):
    """Members removed by a dequeue, highest priority first."""

    model_config = ConfigDict(frozen=True)

    queue_id: str
    mode: DequeueMode
    members: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when nothing was dequeued."""
        return not self.members

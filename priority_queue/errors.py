"""
Queue error hierarchy.

Every failure surfaced by the queue service derives from QueueError so callers
can handle the whole family at once or pick out the conditions they care about.
"""


class QueueError(Exception):
    """Base class for queue service errors."""


class StoreUnavailableError(QueueError):
    """
    A store command failed.

    Carries the operation name and queue id; the underlying Redis error is
    chained as ``__cause__`` and is not part of the message.
    """

    def __init__(self, operation: str, queue_id: str):
        self.operation = operation
        self.queue_id = queue_id
        super().__init__(f"store unavailable during {operation} on queue '{queue_id}'")


class QueueEmptyError(QueueError):
    """The queue holds no entries."""

    def __init__(self, operation: str, queue_id: str):
        self.operation = operation
        self.queue_id = queue_id
        super().__init__(f"queue '{queue_id}' is empty")


class MemberNotFoundError(QueueError):
    """The member is not part of the queue's live ordering."""

    def __init__(self, queue_id: str, member_id: str):
        self.queue_id = queue_id
        self.member_id = member_id
        super().__init__(f"member '{member_id}' not found in queue '{queue_id}'")


class InvalidRequestError(QueueError, ValueError):
    """A request failed validation before reaching the store."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)

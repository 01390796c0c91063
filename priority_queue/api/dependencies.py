"""
FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from priority_queue.store.service import QueueService


def get_queue_service(request: Request) -> QueueService:
    """
    Get the queue service attached to the application.

    Raises:
        RuntimeError: If the application has not been started.
    """
    service = getattr(request.app.state, "queue_service", None)
    if service is None:
        raise RuntimeError("Queue service not initialized. Start the application first.")
    return service


QueueServiceDep = Annotated[QueueService, Depends(get_queue_service)]

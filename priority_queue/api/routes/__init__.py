"""
API routes module.
"""

from priority_queue.api.routes.health import router as health_router
from priority_queue.api.routes.queues import router as queues_router

__all__ = ["queues_router", "health_router"]

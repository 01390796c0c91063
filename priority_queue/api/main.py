"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from priority_queue import __version__
from priority_queue.api.errors import register_exception_handlers
from priority_queue.api.middleware import create_metrics_middleware
from priority_queue.api.routes import health_router, queues_router
from priority_queue.config import get_settings
from priority_queue.observability.logging import setup_logging
from priority_queue.observability.metrics import setup_metrics
from priority_queue.observability.tracing import (
    instrument_fastapi,
    instrument_redis,
    setup_tracing,
)
from priority_queue.store import QueueService, close_store, init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Connects to Redis and builds the queue service unless one was supplied
    to create_app().
    """
    settings = get_settings()
    setup_logging(settings)
    setup_tracing()
    instrument_redis()

    owns_store = getattr(app.state, "queue_service", None) is None
    if owns_store:
        client = await init_store(settings)
        app.state.queue_service = QueueService(
            client,
            key_prefix=settings.redis_key_prefix,
            metrics=setup_metrics(),
        )

    logger.info("Application started")

    yield

    if owns_store:
        app.state.queue_service = None
        await close_store()
    logger.info("Application shutdown")


def create_app(queue_service: QueueService | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        queue_service: Optional pre-built service. When omitted the lifespan
            connects to the configured Redis.

    Returns:
        FastAPI: The configured application instance.
    """
    app = FastAPI(
        title="Priority Queue API",
        description="Priority queue over Redis sorted sets with dequeue auditing",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.queue_service = queue_service

    app.add_middleware(
        BaseHTTPMiddleware,
        dispatch=create_metrics_middleware(setup_metrics()),
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(queues_router)

    instrument_fastapi(app)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()

    uvicorn.run(
        "priority_queue.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

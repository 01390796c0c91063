"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator
from uuid import uuid4

import fakeredis
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from prometheus_client import CollectorRegistry

from priority_queue.api.main import create_app
from priority_queue.config import Settings
from priority_queue.observability.metrics import MetricsCollector
from priority_queue.store.service import QueueService


@pytest.fixture
def fake_server() -> fakeredis.FakeServer:
    """Create an isolated in-memory Redis server."""
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def redis_client(
    fake_server: fakeredis.FakeServer,
) -> AsyncGenerator[fakeredis.FakeAsyncRedis]:
    """Create an async Redis client bound to the fake server."""
    client = fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)

    yield client

    await client.aclose()


@pytest.fixture
def metrics() -> MetricsCollector:
    """Create a metrics collector with its own registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def service(redis_client: fakeredis.FakeAsyncRedis, metrics: MetricsCollector) -> QueueService:
    """Create a queue service over the fake Redis."""
    return QueueService(redis_client, metrics=metrics)


@pytest.fixture
def queue_id() -> str:
    """Generate a queue identifier."""
    return f"test-queue-{uuid4().hex[:8]}"


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        redis_url="redis://localhost:6379/15",
        redis_key_prefix="test:",
        log_level="DEBUG",
        log_format="console",
    )


@pytest.fixture
def app(service: QueueService) -> FastAPI:
    """Create a FastAPI app wired to the fake-Redis queue service."""
    return create_app(queue_service=service)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

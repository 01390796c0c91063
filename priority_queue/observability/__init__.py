"""
Observability module.
Contains logging, metrics, and tracing setup.
"""

from priority_queue.observability.logging import queue_context, setup_logging
from priority_queue.observability.metrics import (
    MetricsCollector,
    get_metrics,
    setup_metrics,
)
from priority_queue.observability.tracing import get_tracer, setup_tracing

__all__ = [
    "setup_logging",
    "queue_context",
    "setup_metrics",
    "get_metrics",
    "MetricsCollector",
    "setup_tracing",
    "get_tracer",
]

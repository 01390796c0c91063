"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from priority_queue.constants import (
    METRIC_API_LATENCY,
    METRIC_API_REQUESTS,
    METRIC_MEMBERS_DELETED,
    METRIC_MEMBERS_DEQUEUED,
    METRIC_MEMBERS_ENQUEUED,
    METRIC_QUEUE_DEPTH,
    METRIC_STORE_ERRORS,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for the queue service.

    Collects metrics for:
    - Queue depth
    - Enqueued, dequeued and deleted members
    - Store failures
    - API requests
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.queue_depth = Gauge(
            METRIC_QUEUE_DEPTH,
            "Number of members in the queue's live ordering",
            ["queue_id"],
            registry=self._registry,
        )

        self.members_enqueued = Counter(
            METRIC_MEMBERS_ENQUEUED,
            "Total number of enqueue and set-priority upserts",
            ["queue_id", "operation"],
            registry=self._registry,
        )

        self.members_dequeued = Counter(
            METRIC_MEMBERS_DEQUEUED,
            "Total number of members removed by dequeue",
            ["queue_id", "mode"],
            registry=self._registry,
        )

        self.members_deleted = Counter(
            METRIC_MEMBERS_DELETED,
            "Total number of members removed by delete",
            ["queue_id"],
            registry=self._registry,
        )

        self.store_errors = Counter(
            METRIC_STORE_ERRORS,
            "Total number of failed store calls",
            ["operation"],
            registry=self._registry,
        )

        self.api_requests = Counter(
            METRIC_API_REQUESTS,
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self._registry,
        )

        self.api_latency = Histogram(
            METRIC_API_LATENCY,
            "API request latency in seconds",
            ["method", "endpoint"],
            buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
            registry=self._registry,
        )

    def record_upsert(self, queue_id: str, operation: str) -> None:
        """Record an enqueue or set-priority."""
        self.members_enqueued.labels(queue_id=queue_id, operation=operation).inc()

    def record_dequeued(self, queue_id: str, mode: str, count: int) -> None:
        """Record members removed by a dequeue."""
        if count:
            self.members_dequeued.labels(queue_id=queue_id, mode=mode).inc(count)

    def record_deleted(self, queue_id: str, count: int = 1) -> None:
        """Record members removed by delete."""
        if count:
            self.members_deleted.labels(queue_id=queue_id).inc(count)

    def record_store_error(self, operation: str) -> None:
        """Record a failed store call."""
        self.store_errors.labels(operation=operation).inc()

    def update_queue_depth(self, queue_id: str, depth: int) -> None:
        """Update queue depth for a queue."""
        self.queue_depth.labels(queue_id=queue_id).set(depth)

    def record_api_request(
        self,
        method: str,
        endpoint: str,
        status: int,
        duration_seconds: float,
    ) -> None:
        """Record an API request."""
        self.api_requests.labels(
            method=method,
            endpoint=endpoint,
            status=str(status),
        ).inc()
        self.api_latency.labels(method=method, endpoint=endpoint).observe(
            duration_seconds
        )

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """Get the metrics collector instance, creating it on first use."""
    if _metrics is None:
        return setup_metrics()
    return _metrics

"""
Request metrics middleware.
"""

import time
from collections.abc import Callable

from fastapi import Request

from priority_queue.observability.metrics import MetricsCollector

# Paths excluded from request metrics
UNTRACKED_PATHS = {"/metrics", "/live", "/docs", "/openapi.json"}


def create_metrics_middleware(metrics: MetricsCollector) -> Callable:
    """
    Create middleware recording request count and latency.

    Requests are labelled with the matched route template rather than the raw
    path, so queue and member ids do not become label values.

    Args:
        metrics: Collector receiving the observations.

    Returns:
        The middleware function.
    """

    async def metrics_middleware(request: Request, call_next: Callable):
        """Time the request and record it once the response is produced."""
        if request.url.path in UNTRACKED_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")
        metrics.record_api_request(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
            duration_seconds=duration,
        )
        return response

    return metrics_middleware

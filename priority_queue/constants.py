"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class DequeueMode(StrEnum):
    """
    Dequeue behaviors.

    - SINGLE: remove the highest-priority member
    - FIRST_N: remove the first N members by rank
    - RELEASE_ALL: remove every member and flag the queue as released
    """

    SINGLE = "single"
    FIRST_N = "first_n"
    RELEASE_ALL = "release_all"


# Redis key templates, namespaced by concern and queue id
QUEUE_KEY = "queue:{queue_id}"
RELEASE_KEY = "release:{queue_id}"
DEQUEUE_KEY = "dequeue:{queue_id}"

# Value stored under the release flag key
RELEASE_FLAG_VALUE = "1"

# API constants
API_V1_PREFIX = "/v1"

# Metrics names
METRIC_QUEUE_DEPTH = "priority_queue_depth"
METRIC_MEMBERS_ENQUEUED = "priority_queue_members_enqueued_total"
METRIC_MEMBERS_DEQUEUED = "priority_queue_members_dequeued_total"
METRIC_MEMBERS_DELETED = "priority_queue_members_deleted_total"
METRIC_STORE_ERRORS = "priority_queue_store_errors_total"
METRIC_API_REQUESTS = "api_requests_total"
METRIC_API_LATENCY = "api_request_latency_seconds"

# Trace span names are SPAN_PREFIX + "." + operation
SPAN_PREFIX = "queue"

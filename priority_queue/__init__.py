"""
Redis Priority Queue

A priority queue over Redis sorted sets with lowest-score-first dequeue,
rank lookups, re-prioritization, and a durable audit of dequeued members.
"""

__version__ = "1.0.0"

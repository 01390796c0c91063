"""
API module.
Contains FastAPI application, routes, and middleware.
"""

from priority_queue.api.main import create_app, run

__all__ = ["create_app", "run"]

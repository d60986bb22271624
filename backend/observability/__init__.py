"""
Observability module.

Provides logging configuration, request ID tracking and request logging
middleware.
"""

from backend.observability.correlation import get_request_id, set_request_id
from backend.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "get_request_id", "set_request_id"]

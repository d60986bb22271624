"""
Request ID context manager.

Manages request ID propagation across async boundaries using contextvars.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

from contextvars import ContextVar
import uuid

request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Generate a new request ID."""
    return uuid.uuid4().hex


def set_request_id(request_id: str | None = None) -> str:
    """
    Set request ID in context.

    Args:
        request_id: Optional request ID (generates new if None or empty)

    Returns:
        str: The request ID that was set
    """
    value = request_id or generate_request_id()
    request_id_ctx.set(value)
    return value


def get_request_id() -> str:
    """
    Get current request ID from context.

    Returns:
        str: Current request ID, empty string outside a request
    """
    return request_id_ctx.get()


def clear_request_id() -> None:
    """Clear request ID from context."""
    request_id_ctx.set("")

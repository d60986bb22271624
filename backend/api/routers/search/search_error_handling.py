"""
Search error handling utilities.

Provides a decorator that turns any failure escaping a search endpoint
into the search error envelope, logged with request ID, stage name and
elapsed time.

Dependencies: fastapi, backend.observability, backend.models.search
System role: Search endpoint error boundary
"""

import functools
import logging
import time
from typing import Any, Callable, TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse

from backend.core.exceptions import SearchValidationError
from backend.core.search.transformer import format_duration
from backend.models.search import SearchErrorResponse, SearchFailureResponse
from backend.observability.correlation import generate_request_id
from backend.observability.log_utils import log_request_error

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

INTERNAL_ERROR_MESSAGE = "An internal error occurred while searching images"


def resolve_request_id(request: Request | None) -> str:
    """Request ID assigned by the middleware, or a fresh one."""
    request_id = getattr(request.state, "request_id", None) if request is not None else None
    return request_id or generate_request_id()


def format_error_response(request_id: str, duration_ms: float) -> SearchErrorResponse:
    """
    Build the error envelope for an unexpected failure.

    The exception text is logged, never exposed to callers.

    Args:
        request_id: Request identifier
        duration_ms: Elapsed milliseconds

    Returns:
        SearchErrorResponse: Generic error envelope
    """
    return SearchErrorResponse(
        error=INTERNAL_ERROR_MESSAGE,
        request_id=request_id,
        duration=format_duration(duration_ms),
    )


def handle_search_errors(stage: str) -> Callable[[F], F]:
    """
    Decorator mapping search failures to HTTP error envelopes.

    - SearchValidationError -> 400 {success: false, message}
    - Any other exception -> 500 error envelope

    Args:
        stage: Stage name recorded in error logs
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)

            # The facade returns validation failures as values; this covers
            # callers that reach normalize_query without validating first
            except SearchValidationError as e:
                logger.warning("Invalid search request", extra={"error": e.message})
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content=SearchFailureResponse(message=e.message).model_dump(),
                )

            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                request_id = resolve_request_id(kwargs.get("request"))
                log_request_error(logger, request_id, stage, duration_ms, e)
                return JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content=format_error_response(request_id, duration_ms).model_dump(by_alias=True),
                )

        return wrapper  # type: ignore

    return decorator

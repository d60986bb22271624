"""
Logging utilities for request-scoped structured logging.

Safe value conversion plus start/success/error helpers that tag every
record with request ID, stage name and elapsed time.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Handles lists, dicts, None, and other types safely.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {f"ctx_{key}": safe_log_value(val) for key, val in context.items()}


def log_request_start(
    logger: logging.Logger,
    request_id: str,
    stage: str,
    **context,
) -> None:
    """
    Log the start of a request stage.

    Args:
        logger: Logger instance
        request_id: Request identifier
        stage: Human-readable stage name (e.g. "Search Images")
        **context: Request parameters worth recording
    """
    logger.info(
        f"{stage} started",
        extra={"request_id": request_id, "stage": stage, **_safe_context(context)},
    )


def log_request_success(
    logger: logging.Logger,
    request_id: str,
    stage: str,
    duration_ms: float,
    **context,
) -> None:
    """
    Log successful completion of a request stage.

    Args:
        logger: Logger instance
        request_id: Request identifier
        stage: Stage name
        duration_ms: Elapsed milliseconds
        **context: Outcome summary (counts, totals)
    """
    logger.info(
        f"{stage} completed in {duration_ms:.0f}ms",
        extra={
            "request_id": request_id,
            "stage": stage,
            "duration_ms": round(duration_ms, 2),
            **_safe_context(context),
        },
    )


def log_request_error(
    logger: logging.Logger,
    request_id: str,
    stage: str,
    duration_ms: float,
    exc: Exception,
) -> None:
    """
    Log a failed request stage with its exception and traceback.

    Args:
        logger: Logger instance
        request_id: Request identifier
        stage: Stage name
        duration_ms: Elapsed milliseconds
        exc: Exception instance
    """
    logger.exception(
        f"{stage} failed after {duration_ms:.0f}ms",
        extra={
            "request_id": request_id,
            "stage": stage,
            "duration_ms": round(duration_ms, 2),
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
        },
    )

"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_current_user_id,
    get_search_service,
    get_service_cache,
)

__all__ = [
    "get_current_user_id",
    "get_search_service",
    "get_service_cache",
]

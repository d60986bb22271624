"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: backend.configs, backend.application, backend.boundary
System role: DI container for service injection
"""

from uuid import UUID

from fastapi import Request

from backend.application.services import SearchService
from backend.boundary.db import ImageSearchRepository, get_async_session_factory
from backend.configs import get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._search_service = None

    @property
    def search_service(self) -> SearchService:
        """Get cached search service."""
        if self._search_service is None:
            settings = get_settings()
            repository = ImageSearchRepository(
                session_factory=get_async_session_factory(),
                overfetch_multiplier=settings.search.overfetch_multiplier,
            )
            self._search_service = SearchService.from_settings(repository, settings.search)
        return self._search_service

    def clear(self) -> None:
        """Clear all cached instances."""
        self._search_service = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_search_service() -> SearchService:
    """
    Get search service instance.

    The facade holds no per-request state, so one instance is shared.

    Returns:
        SearchService: Configured search facade
    """
    return get_service_cache().search_service


def get_current_user_id(request: Request) -> UUID | None:
    """
    Caller identity placed on request.state by the authentication layer.

    Args:
        request: FastAPI request

    Returns:
        UUID of the authenticated caller, None for anonymous callers
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is None or isinstance(user_id, UUID):
        return user_id
    try:
        return UUID(str(user_id))
    except ValueError:
        return None

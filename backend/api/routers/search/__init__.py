"""
Search router package.

Exports the router for image search endpoints.
"""

from .search_router import router

__all__ = ["router"]

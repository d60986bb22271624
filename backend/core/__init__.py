"""
Core business logic module.

Contains domain business logic, exception hierarchy, and the search
pipeline stages. All business rules and domain-specific logic reside here.
"""

from backend.core.exceptions import (
    SearchEngineException,
    SearchValidationError,
)

__all__ = [
    # Exceptions
    "SearchEngineException",
    "SearchValidationError",
]

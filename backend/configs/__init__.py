"""
Configuration management module.

Typed settings groups loaded from the environment with pydantic-settings:
database connection (POSTGRES_*) and search tuning (SEARCH_*).
"""

from backend.configs.database import DatabaseSettings
from backend.configs.search import ScoringWeights, SearchSettings
from backend.configs.settings import Settings, get_settings

__all__ = ["DatabaseSettings", "ScoringWeights", "SearchSettings", "Settings", "get_settings"]

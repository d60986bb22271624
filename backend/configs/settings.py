"""
Unified application settings.

Combines the database and search settings groups with the shared base
fields. One cached instance is used by the engine factory, the service
cache and the app lifespan.

Dependencies: backend.configs.database, backend.configs.search
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from backend.configs.base import BaseSettings
from backend.configs.database import DatabaseSettings
from backend.configs.search import SearchSettings


class Settings(BaseSettings):
    """Image search service settings."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings singleton.

    Environment variables are read once; call get_settings.cache_clear()
    to reload them (tests do this after patching the environment).

    Returns:
        Settings: Application settings instance
    """
    return Settings()

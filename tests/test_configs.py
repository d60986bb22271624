"""
Test suite for configuration loading.

Tests environment variable mapping for search and database settings and
the cached settings singleton.

System role: Verification of configuration layer
"""

import pytest

from backend.configs import DatabaseSettings, SearchSettings, get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Drop the cached Settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSearchSettings:
    """SEARCH_* environment mapping."""

    def test_defaults(self) -> None:
        """Test default limits and weights."""
        settings = SearchSettings()

        assert settings.max_query_length == 500
        assert settings.max_limit == 100
        assert settings.default_limit == 50
        assert settings.overfetch_multiplier == 2
        assert settings.scoring.exact_match == 100
        assert settings.scoring.exact_tag == 70

    def test_environment_overrides_including_nested_weights(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test flat and nested variables are applied."""
        # Arrange
        monkeypatch.setenv("SEARCH_MAX_LIMIT", "20")
        monkeypatch.setenv("SEARCH_SCORING__EXACT_MATCH", "150")
        monkeypatch.setenv("SEARCH_SCORING__CONTAINS", "0")

        # Act
        settings = SearchSettings()

        # Assert
        assert settings.max_limit == 20
        assert settings.scoring.exact_match == 150
        assert settings.scoring.contains == 0
        assert settings.scoring.starts_with == 80


class TestDatabaseSettings:
    """POSTGRES_* environment mapping."""

    def test_async_url_should_use_asyncpg_by_default(self) -> None:
        """Test the default URL targets PostgreSQL through asyncpg."""
        settings = DatabaseSettings(host="db", port=5433, user="u", password="p", db="images", sslmode="disable")

        assert settings.async_database_url.startswith("postgresql+asyncpg://u:p@db:5433/images")
        assert settings.is_sqlite is False

    def test_url_override_should_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test POSTGRES_URL replaces the composed URL."""
        monkeypatch.setenv("POSTGRES_URL", "sqlite+aiosqlite:///./search.db")

        settings = DatabaseSettings()

        assert settings.async_database_url == "sqlite+aiosqlite:///./search.db"
        assert settings.is_sqlite is True


def test_get_settings_should_be_cached() -> None:
    """Test the same instance is returned until the cache is cleared."""
    first = get_settings()

    assert get_settings() is first
    get_settings.cache_clear()
    assert get_settings() is not first

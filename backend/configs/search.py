"""
Search engine configuration settings.

Validation limits, repository over-fetch and scoring weights for the
image search pipeline. Weights can be tuned per deployment through
nested environment variables (e.g. SEARCH_SCORING__EXACT_MATCH=150).

Dependencies: pydantic, pydantic_settings
System role: Search pipeline configuration
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import SettingsConfigDict

from backend.configs.base import BaseSettings


class ScoringWeights(BaseModel):
    """
    Relevance weights per match type.

    Any weight may be set to 0 to disable that match type; zero is kept
    as-is and never replaced by the default.
    """

    model_config = ConfigDict(frozen=True)

    # Prompt field
    exact_match: int = Field(default=100, ge=0, description="Prompt equals the word")
    starts_with: int = Field(default=80, ge=0, description="Prompt starts with the word")
    contains: int = Field(default=50, ge=0, description="Prompt contains the word")

    # Tags, scored per tag
    exact_tag: int = Field(default=70, ge=0, description="Tag equals the word")
    tag_starts: int = Field(default=40, ge=0, description="Tag starts with the word")
    tag_contains: int = Field(default=20, ge=0, description="Tag contains the word")

    # Other fields
    provider_model: int = Field(default=30, ge=0, description="Provider or model contains the word")
    original_bonus: int = Field(default=25, ge=0, description="Unenhanced prompt contains the word")


class SearchSettings(BaseSettings):
    """Image search pipeline configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SEARCH_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    max_query_length: int = Field(default=500, ge=1, description="Maximum search query length")
    max_limit: int = Field(default=100, ge=1, description="Maximum results per page")
    default_limit: int = Field(default=50, ge=1, description="Results per page when unset")

    overfetch_multiplier: int = Field(
        default=2,
        ge=1,
        description="Rows fetched per requested result before scoring",
    )

    scoring: ScoringWeights = Field(
        default_factory=ScoringWeights,
        description="Relevance weights per match type (0 disables a match type)",
    )

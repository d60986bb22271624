"""
Search options and filters.

Closed, typed representation of the knobs a caller can turn on a search:
match type hint, tag filters and named score thresholds. Raw transport
values are parsed into these types once by the validator; downstream
stages only see validated input.

Dependencies: pydantic
System role: Search option contracts shared by every pipeline stage
"""

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class MatchType(str, Enum):
    """
    How search terms are meant to match text fields.

    CONTAINS matches anywhere in the field ("cat" matches "black cat"),
    EXACT requires the whole field to equal the term, STARTS_WITH requires
    the field to begin with it. The value is carried through the pipeline
    and echoed back, the scorer always applies its tiered weights.
    """

    CONTAINS = "contains"
    EXACT = "exact"
    STARTS_WITH = "startsWith"


class TagFilter(str, Enum):
    """Result filtering by tag presence."""

    ANY = "any"
    WITH_TAGS = "with"
    WITHOUT_TAGS = "without"
    SPECIFIC_TAGS = "specific"


class ScoreThreshold(IntEnum):
    """
    Named minimum scores for filtering results by relevance.

    EXACT_ONLY matches the exact-tag weight class, HIGH_RELEVANCE keeps
    prompt hits, MEDIUM_RELEVANCE admits provider/model-only hits.
    """

    EXACT_ONLY = 70
    HIGH_RELEVANCE = 50
    MEDIUM_RELEVANCE = 30
    LOW_RELEVANCE = 0


class SearchOptions(BaseModel):
    """
    Validated filtering options for a single search request.

    Attributes:
        match_type: Match type hint (echoed, not enforced by scoring)
        exact_only: Keep only results in the exact-match weight class
        min_score: Minimum relevance score (ignored when exact_only is set)
        tag_filter: Tag presence filter
        specific_tags: Tags of which a result must carry at least one
    """

    model_config = ConfigDict(frozen=True)

    match_type: MatchType = MatchType.CONTAINS
    exact_only: bool = False
    min_score: int = Field(default=int(ScoreThreshold.LOW_RELEVANCE), ge=0)
    tag_filter: TagFilter = TagFilter.ANY
    specific_tags: tuple[str, ...] = ()

    def as_applied(self) -> dict:
        """Echo of the options in the transport's camelCase vocabulary."""
        return {
            "matchType": self.match_type.value,
            "exactOnly": self.exact_only,
            "minScore": self.min_score,
            "tagFilter": self.tag_filter.value,
            "specificTags": list(self.specific_tags),
        }


DEFAULT_SEARCH_OPTIONS = SearchOptions()

"""
Search pipeline data classes.

Contains pure data containers passed between pipeline stages:
- NormalizedQuery: lower-cased term and its words
- Pagination: clamped page/limit/skip
- Candidate / ScoredCandidate: retrieved image records before and after scoring
- RepositoryPage: retrieval stage output
- SearchResult / SearchValidationFailure: facade outcomes

Dependencies: dataclasses, backend.core.search.options
System role: Stage-to-stage contracts for the search pipeline
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from backend.core.search.options import SearchOptions

UNKNOWN_USERNAME = "Unknown"


@dataclass(frozen=True)
class NormalizedQuery:
    """Lower-cased, trimmed search term split into whitespace-delimited words."""

    term: str
    words: tuple[str, ...]


@dataclass(frozen=True)
class Pagination:
    """Normalized pagination parameters."""

    page: int
    limit: int
    skip: int

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {"page": self.page, "limit": self.limit, "skip": self.skip}


@dataclass(frozen=True)
class QueryValidation:
    """Outcome of query string validation."""

    valid: bool
    error: str | None = None
    status: int | None = None


@dataclass(frozen=True)
class Candidate:
    """
    Image record retrieved by the recall stage.

    Built from one store row; ``username`` is filled in by the repository's
    enrichment pass. Never persisted or cached across requests.
    """

    id: UUID
    image_url: str
    prompt: str
    original: str | None = None
    provider: str | None = None
    model: str | None = None
    guidance: float | None = None
    tags: tuple[str, ...] = ()
    rating: int = 0
    is_public: bool = False
    is_hidden: bool = False
    tagged_at: datetime | None = None
    created_at: datetime | None = None
    user_id: UUID | None = None
    username: str = UNKNOWN_USERNAME

    def with_username(self, username: str) -> "Candidate":
        """Return a copy carrying the resolved display username."""
        return replace(self, username=username)


@dataclass(frozen=True)
class ScoredCandidate:
    """Candidate annotated with its relevance score."""

    candidate: Candidate
    score: int


@dataclass(frozen=True)
class RepositoryPage:
    """Over-fetched candidates plus the unfiltered predicate match count."""

    candidates: list[Candidate]
    total: int


@dataclass(frozen=True)
class SearchResult:
    """
    Successful facade outcome.

    ``total`` is the predicate match count computed before scoring and
    is not adjusted for post-scoring filters.
    """

    items: list[ScoredCandidate]
    total: int
    pagination: Pagination
    search_term: str
    filter: str
    applied_options: SearchOptions
    success: bool = field(default=True, init=False)

    def meta(self) -> dict[str, Any]:
        """Diagnostic metadata echoed in the response envelope."""
        return {
            "query": self.search_term,
            "filter": self.filter,
            "resultCount": len(self.items),
        }


@dataclass(frozen=True)
class SearchValidationFailure:
    """Facade outcome for a rejected query; never raised."""

    error: str
    status: int = 400
    success: bool = field(default=False, init=False)

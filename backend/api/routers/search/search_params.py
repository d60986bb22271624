"""
Search query-string parameters.

Collects raw query-string values without coercion so malformed page,
limit or filter values fall back to defaults instead of failing the
request with a 422.

Dependencies: fastapi
System role: Image search request parsing
"""

from dataclasses import dataclass

from fastapi import Query


@dataclass(frozen=True)
class SearchQueryParams:
    """Raw search parameters as received on the query string."""

    q: str | None
    page: str | None
    limit: str | None
    exact_only: str | None
    min_score: str | None
    tag_filter: str | None
    tags: str | None
    match_type: str | None

    def to_log_context(self) -> dict:
        """Parameters worth recording at request start."""
        return {
            "query": self.q,
            "page": self.page,
            "limit": self.limit,
            "exact_only": self.exact_only,
            "min_score": self.min_score,
            "tag_filter": self.tag_filter,
            "tags": self.tags,
        }


def get_search_params(
    q: str | None = Query(None, description="Search query (required)"),
    page: str | None = Query(None, description="Page number, 1-based (default 1)"),
    limit: str | None = Query(None, description="Results per page (default 50, max 100)"),
    exact_only: str | None = Query(None, alias="exactOnly", description="'true' or '1' for exact matches only"),
    min_score: str | None = Query(None, alias="minScore", description="Minimum relevance score"),
    tag_filter: str | None = Query(None, alias="tagFilter", description="any, with, without or specific"),
    tags: str | None = Query(None, description="Comma-separated tags, at least one must match"),
    match_type: str | None = Query(None, alias="matchType", description="contains, exact or startsWith"),
) -> SearchQueryParams:
    """FastAPI dependency collecting raw search parameters."""
    return SearchQueryParams(
        q=q,
        page=page,
        limit=limit,
        exact_only=exact_only,
        min_score=min_score,
        tag_filter=tag_filter,
        tags=tags,
        match_type=match_type,
    )

"""
Search result transformation.

Reshapes scored candidates into the public item schema and assembles the
paginated response envelope. Pure functions, no I/O.

Dependencies: backend.models.search, backend.core.search.models
System role: Response shaping stage of the search pipeline
"""

from collections.abc import Sequence

from backend.core.search.models import Candidate, Pagination, ScoredCandidate
from backend.models.search import (
    ImageSearchItem,
    SearchData,
    SearchMeta,
    SearchPaginationInfo,
    SearchResponse,
)


def format_duration(duration_ms: float) -> str:
    """Format elapsed milliseconds the way the envelope reports them."""
    return f"{int(round(duration_ms))}ms"


class SearchResultTransformer:
    """Transform internal search results into the external contract."""

    def transform(self, result: Candidate | ScoredCandidate) -> ImageSearchItem:
        """
        Map one candidate to its public shape.

        Args:
            result: Candidate, optionally wrapped with its score

        Returns:
            ImageSearchItem: Public record without the score
        """
        candidate = result.candidate if isinstance(result, ScoredCandidate) else result
        return ImageSearchItem(
            id=candidate.id,
            url=candidate.image_url,
            image_url=candidate.image_url,
            prompt=candidate.prompt,
            original=candidate.original,
            provider=candidate.provider,
            model=candidate.model,
            guidance=candidate.guidance,
            tags=list(candidate.tags),
            rating=candidate.rating,
            is_public=candidate.is_public,
            is_hidden=candidate.is_hidden,
            tagged_at=candidate.tagged_at,
            created_at=candidate.created_at,
            user_id=candidate.user_id,
            username=candidate.username,
        )

    def build_response(
        self,
        results: Sequence[Candidate | ScoredCandidate],
        total: int,
        pagination: Pagination,
        meta: dict,
        request_id: str,
        duration_ms: float,
    ) -> SearchResponse:
        """
        Assemble the success envelope.

        ``has_more`` compares the returned (post-filter) count against the
        unfiltered ``total``, so it can report more pages when filters
        removed the remaining matches.

        Args:
            results: Ranked results for this page
            total: Unfiltered predicate match count
            pagination: Normalized pagination
            meta: query, filter and resultCount
            request_id: Request identifier
            duration_ms: Elapsed milliseconds

        Returns:
            SearchResponse: Envelope ready for serialization
        """
        items = [self.transform(result) for result in results]
        return SearchResponse(
            data=SearchData(
                items=items,
                pagination=SearchPaginationInfo(
                    page=pagination.page,
                    limit=pagination.limit,
                    total=total,
                ),
                has_more=pagination.skip + len(items) < total,
                meta=SearchMeta(
                    query=meta.get("query", ""),
                    filter=meta.get("filter", "public"),
                    result_count=meta.get("resultCount", len(items)),
                ),
            ),
            request_id=request_id,
            duration=format_duration(duration_ms),
        )

"""
Image search service orchestrator.

Sequences the search pipeline once per call:
validate -> build predicate -> retrieve -> score/filter/rank.
Validation failures come back as values; everything else propagates.

Dependencies: backend.core.search, backend.boundary.db.search_repository, backend.configs
System role: Image search use case orchestration
"""

import logging
from uuid import UUID

from backend.boundary.db.search_repository import ImageSearchRepository
from backend.configs.search import SearchSettings
from backend.core.search.models import SearchResult, SearchValidationFailure
from backend.core.search.options import SearchOptions
from backend.core.search.query_builder import SearchQueryBuilder
from backend.core.search.scoring import SearchScoringService
from backend.core.search.transformer import SearchResultTransformer
from backend.core.search.validator import SearchValidator
from backend.models.search import SearchResponse

logger = logging.getLogger(__name__)


class SearchService:
    """
    Image search facade.

    Holds stateless pipeline components only, so a single instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        repository: ImageSearchRepository,
        validator: SearchValidator | None = None,
        query_builder: SearchQueryBuilder | None = None,
        scorer: SearchScoringService | None = None,
        transformer: SearchResultTransformer | None = None,
    ) -> None:
        """
        Initialize search service with its pipeline stages.

        Args:
            repository: Store access for candidates and totals
            validator: Query/pagination validator (defaults to built-in limits)
            query_builder: Predicate builder (defaults to prompt/original/provider/model)
            scorer: Relevance scorer (defaults to default weights)
            transformer: Response shaper
        """
        self.repository = repository
        self.validator = validator or SearchValidator()
        self.query_builder = query_builder or SearchQueryBuilder()
        self.scorer = scorer or SearchScoringService()
        self.transformer = transformer or SearchResultTransformer()

    @classmethod
    def from_settings(cls, repository: ImageSearchRepository, settings: SearchSettings) -> "SearchService":
        """
        Build a service whose stages use the configured limits and weights.

        Args:
            repository: Store access for candidates and totals
            settings: Search configuration

        Returns:
            SearchService: Configured facade
        """
        return cls(
            repository=repository,
            validator=SearchValidator(
                max_query_length=settings.max_query_length,
                max_limit=settings.max_limit,
                default_limit=settings.default_limit,
            ),
            scorer=SearchScoringService(settings.scoring),
        )

    async def search(
        self,
        query: str | None,
        page: int | str | None = None,
        limit: int | str | None = None,
        user_id: UUID | None = None,
        options: SearchOptions | None = None,
    ) -> SearchResult | SearchValidationFailure:
        """
        Run the search pipeline for one request.

        Args:
            query: Raw query string
            page: Requested page (any type, normalized)
            limit: Requested page size (any type, normalized)
            user_id: Authenticated caller, None for anonymous
            options: Validated filtering options

        Returns:
            SearchResult on success, SearchValidationFailure for a rejected query

        Raises:
            SQLAlchemyError: Store failures, propagated unmodified
        """
        options = options or SearchOptions()

        validation = self.validator.validate_query(query)
        if not validation.valid:
            return SearchValidationFailure(
                error=validation.error or "Invalid search query",
                status=validation.status or 400,
            )

        pagination = self.validator.normalize_pagination(page, limit)
        normalized = self.validator.normalize_query(query)

        predicate = self.query_builder.build_predicate(user_id, normalized.term)
        page_data = await self.repository.search(predicate, skip=pagination.skip, limit=pagination.limit)

        ranked = self.scorer.score_and_rank(
            page_data.candidates,
            normalized.term,
            pagination.limit,
            options,
        )

        filter_label = "authenticated" if user_id is not None else "public"
        logger.info(
            "Search completed",
            extra={
                "search_term": normalized.term,
                "word_count": len(normalized.words),
                "filter": filter_label,
                "candidate_count": len(page_data.candidates),
                "result_count": len(ranked),
                "total": page_data.total,
                **pagination.to_dict(),
            },
        )

        return SearchResult(
            items=ranked,
            total=page_data.total,
            pagination=pagination,
            search_term=normalized.term,
            filter=filter_label,
            applied_options=options,
        )

    def build_response(self, result: SearchResult, request_id: str, duration_ms: float) -> SearchResponse:
        """
        Shape a successful result into the response envelope.

        Args:
            result: Facade output
            request_id: Request identifier
            duration_ms: Elapsed milliseconds

        Returns:
            SearchResponse: Envelope ready for serialization
        """
        return self.transformer.build_response(
            result.items,
            total=result.total,
            pagination=result.pagination,
            meta=result.meta(),
            request_id=request_id,
            duration_ms=duration_ms,
        )

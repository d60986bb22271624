"""
Image search pipeline components.

Validator -> query builder -> (repository) -> scoring -> transformer.
The repository lives in the boundary layer; the facade that sequences
the stages lives in backend.application.services.search_service.
"""

from backend.core.search.options import (
    DEFAULT_SEARCH_OPTIONS,
    MatchType,
    ScoreThreshold,
    SearchOptions,
    TagFilter,
)
from backend.core.search.models import (
    UNKNOWN_USERNAME,
    Candidate,
    NormalizedQuery,
    Pagination,
    QueryValidation,
    RepositoryPage,
    ScoredCandidate,
    SearchResult,
    SearchValidationFailure,
)
from backend.core.search.validator import (
    SearchValidator,
    normalize_search_term,
    parse_tag_list,
    split_words,
)
from backend.core.search.query_builder import (
    DEFAULT_SEARCHABLE_FIELDS,
    SearchableField,
    SearchQueryBuilder,
)
from backend.core.search.scoring import SearchScoringService
from backend.core.search.transformer import SearchResultTransformer, format_duration

__all__ = [
    # Options
    "DEFAULT_SEARCH_OPTIONS",
    "MatchType",
    "ScoreThreshold",
    "SearchOptions",
    "TagFilter",
    # Data
    "UNKNOWN_USERNAME",
    "Candidate",
    "NormalizedQuery",
    "Pagination",
    "QueryValidation",
    "RepositoryPage",
    "ScoredCandidate",
    "SearchResult",
    "SearchValidationFailure",
    # Stages
    "SearchValidator",
    "normalize_search_term",
    "parse_tag_list",
    "split_words",
    "DEFAULT_SEARCHABLE_FIELDS",
    "SearchableField",
    "SearchQueryBuilder",
    "SearchScoringService",
    "SearchResultTransformer",
    "format_duration",
]

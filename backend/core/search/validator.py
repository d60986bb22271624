"""
Search input validation and normalization.

Checks the query string, clamps pagination and parses raw option values
into SearchOptions. The query checks are the only ones that can reject a
request; pagination and options silently fall back to defaults.

Dependencies: backend.core.search.models, backend.core.search.options
System role: First pipeline stage, boundary validation
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from backend.core.exceptions import SearchValidationError
from backend.core.search.models import NormalizedQuery, Pagination, QueryValidation
from backend.core.search.options import MatchType, SearchOptions, TagFilter

logger = logging.getLogger(__name__)

TRUTHY_FLAGS = ("true", "1")


def _to_int(value: Any) -> int | None:
    """Parse an integer the way query-string values arrive, None if unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_search_term(raw: str) -> str:
    """Lower-case and trim a search term."""
    return (raw or "").strip().lower()


def split_words(term: str) -> tuple[str, ...]:
    """Split a term into its whitespace-delimited words."""
    return tuple(word for word in term.split() if word)


def parse_tag_list(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated tag list into trimmed, non-empty tags."""
    if not raw:
        return ()
    return tuple(tag.strip() for tag in raw.split(",") if tag.strip())


class SearchValidator:
    """Validate and normalize search inputs against configured limits."""

    def __init__(
        self,
        max_query_length: int = 500,
        max_limit: int = 100,
        default_limit: int = 50,
    ) -> None:
        """
        Initialize validator limits.

        Args:
            max_query_length: Longest accepted query after trimming
            max_limit: Upper bound for results per page
            default_limit: Results per page when unset or non-numeric
        """
        self.max_query_length = max_query_length
        self.max_limit = max_limit
        self.default_limit = min(default_limit, max_limit)

    def validate_query(self, raw: Any) -> QueryValidation:
        """
        Check that the query is present and within the length limit.

        Args:
            raw: Query as received from the transport layer

        Returns:
            QueryValidation: valid=True, or the error message with HTTP status 400
        """
        query = raw.strip() if isinstance(raw, str) else ""

        if not query:
            return QueryValidation(valid=False, error="Search query is required", status=400)

        if len(query) > self.max_query_length:
            logger.info(
                "Rejecting overlong search query",
                extra={"query_length": len(query), "max_query_length": self.max_query_length},
            )
            return QueryValidation(
                valid=False,
                error=f"Search query too long (max {self.max_query_length} characters)",
                status=400,
            )

        return QueryValidation(valid=True)

    def normalize_pagination(self, page: Any = None, limit: Any = None) -> Pagination:
        """
        Clamp pagination inputs, falling back to defaults on bad values.

        Args:
            page: Requested page (1-based), any type
            limit: Requested page size, any type

        Returns:
            Pagination: page >= 1, 1 <= limit <= max_limit, skip=(page-1)*limit
        """
        page_number = _to_int(page)
        if page_number is None or page_number < 1:
            page_number = 1

        page_size = _to_int(limit)
        if page_size is None:
            page_size = self.default_limit
        page_size = max(1, min(page_size, self.max_limit))

        return Pagination(page=page_number, limit=page_size, skip=(page_number - 1) * page_size)

    def normalize_query(self, raw: str) -> NormalizedQuery:
        """
        Normalize a query into its term and words.

        Raises:
            SearchValidationError: If the query has no words
        """
        term = normalize_search_term(raw)
        words = split_words(term)
        if not words:
            raise SearchValidationError("Search query is required", field="q")
        return NormalizedQuery(term=term, words=words)

    def parse_options(
        self,
        exact_only: Any = None,
        min_score: Any = None,
        tag_filter: Any = None,
        tags: str | None = None,
        match_type: Any = None,
    ) -> SearchOptions:
        """
        Parse raw transport values into SearchOptions.

        Unknown or malformed values are ignored and the default kept.
        """
        values: dict[str, Any] = {}

        if exact_only is not None:
            values["exact_only"] = exact_only is True or exact_only in TRUTHY_FLAGS

        score = _to_int(min_score)
        if score is not None and score >= 0:
            values["min_score"] = score

        if tag_filter in {f.value for f in TagFilter}:
            values["tag_filter"] = TagFilter(tag_filter)

        if match_type in {m.value for m in MatchType}:
            values["match_type"] = MatchType(match_type)

        specific_tags = parse_tag_list(tags)
        if specific_tags:
            values["specific_tags"] = specific_tags

        return SearchOptions(**values)

    @staticmethod
    def validate_options(options: Mapping[str, Any] | None = None) -> SearchOptions:
        """
        Build SearchOptions from already-typed values, dropping invalid entries.

        Accepts either snake_case or camelCase keys.
        """
        options = options or {}
        values: dict[str, Any] = {}

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in options:
                    return options[key]
            return None

        match_type = pick("match_type", "matchType")
        if isinstance(match_type, (MatchType, str)) and match_type in {m.value for m in MatchType}:
            values["match_type"] = MatchType(match_type)

        tag_filter = pick("tag_filter", "tagFilter")
        if isinstance(tag_filter, (TagFilter, str)) and tag_filter in {f.value for f in TagFilter}:
            values["tag_filter"] = TagFilter(tag_filter)

        min_score = pick("min_score", "minScore")
        if isinstance(min_score, (int, float)) and not isinstance(min_score, bool) and min_score >= 0:
            values["min_score"] = int(min_score)

        exact_only = pick("exact_only", "exactOnly")
        if isinstance(exact_only, bool):
            values["exact_only"] = exact_only

        specific_tags = pick("specific_tags", "specificTags")
        if isinstance(specific_tags, (list, tuple)):
            values["specific_tags"] = tuple(tag for tag in specific_tags if isinstance(tag, str))

        return SearchOptions(**values)

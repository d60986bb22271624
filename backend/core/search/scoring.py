"""
Relevance scoring and ranking for search candidates.

Each image receives a score based on how well it matches the search term.
Higher scores appear first.

How scoring works:
    1. Multi-word queries are scored word by word and summed:
       "cat flux" -> score("cat") + score("flux").
    2. Per word, every field can contribute:
       - prompt: exact / starts-with / contains, best tier only
       - original prompt: flat bonus when it differs from the prompt
       - tags: exact / starts-with / contains per tag, all tags summed
       - provider and model: flat weight each
    3. Filters run after scoring, then results are sorted and truncated.

Dependencies: backend.configs.search, backend.core.search
System role: Ranking stage of the search pipeline
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

from backend.configs.search import ScoringWeights
from backend.core.search.models import Candidate, ScoredCandidate
from backend.core.search.options import SearchOptions, TagFilter
from backend.core.search.validator import split_words

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _lower(text: str | None) -> str:
    return (text or "").lower()


def _recency_key(candidate: Candidate) -> float:
    created_at = candidate.created_at
    if created_at is None:
        return _EPOCH.timestamp()
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.timestamp()


class SearchScoringService:
    """
    Calculate relevance scores and rank search candidates.

    Weights come from ScoringWeights; a weight of 0 disables that match
    type entirely.
    """

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        """
        Initialize scoring service.

        Args:
            weights: Relevance weights, defaults to ScoringWeights()
        """
        self.weights = weights or ScoringWeights()

    def calculate_score(self, candidate: Candidate, search_term: str) -> int:
        """
        Total relevance score for a candidate, summed over the term's words.

        Args:
            candidate: Image record to score
            search_term: Normalized (lower-cased) search term

        Returns:
            int: Non-negative relevance score, 0 when nothing matches
        """
        total = 0
        for word in split_words(search_term):
            total += self.score_prompt(candidate.prompt, word)
            total += self.score_original_prompt(candidate.original, candidate.prompt, word)
            total += self.score_tags(candidate.tags, word)
            total += self.score_provider_model(candidate.provider, candidate.model, word)
        return total

    def score_prompt(self, prompt: str | None, word: str) -> int:
        """Score the prompt field, best tier only."""
        return self._score_text_field(
            prompt,
            word,
            exact=self.weights.exact_match,
            starts=self.weights.starts_with,
            contains=self.weights.contains,
        )

    def score_original_prompt(self, original: str | None, prompt: str | None, word: str) -> int:
        """Bonus when the user-entered prompt differs from the prompt and contains the word."""
        original_lower = _lower(original)
        if original_lower and original_lower != _lower(prompt) and word in original_lower:
            return self.weights.original_bonus
        return 0

    def score_tags(self, tags: Iterable[str] | None, word: str) -> int:
        """Score every tag independently and sum the results."""
        return sum(
            self._score_text_field(
                tag,
                word,
                exact=self.weights.exact_tag,
                starts=self.weights.tag_starts,
                contains=self.weights.tag_contains,
            )
            for tag in tags or ()
        )

    def score_provider_model(self, provider: str | None, model: str | None, word: str) -> int:
        """Flat weight for provider and, independently, for model."""
        score = 0
        if word in _lower(provider):
            score += self.weights.provider_model
        if word in _lower(model):
            score += self.weights.provider_model
        return score

    @staticmethod
    def _score_text_field(text: str | None, word: str, exact: int, starts: int, contains: int) -> int:
        text_lower = _lower(text)
        if not text_lower:
            return 0
        if text_lower == word:
            return exact
        if text_lower.startswith(word):
            return starts
        if word in text_lower:
            return contains
        return 0

    def passes_filters(self, scored: ScoredCandidate, options: SearchOptions) -> bool:
        """
        Apply post-scoring filters to one scored candidate.

        Order: zero score, exact-only threshold or min score, tag presence,
        specific tag membership.

        exact_only is a threshold heuristic: it keeps scores at or above the
        exact-tag weight, the lowest weight an exact prompt or tag match can
        reach on its own. It does not check which fields matched.
        """
        if scored.score <= 0:
            return False

        if options.exact_only:
            if scored.score < self.weights.exact_tag:
                return False
        elif scored.score < options.min_score:
            return False

        tags = scored.candidate.tags
        if options.tag_filter == TagFilter.WITH_TAGS and not tags:
            return False
        if options.tag_filter == TagFilter.WITHOUT_TAGS and tags:
            return False

        if options.specific_tags:
            image_tags = {tag.lower() for tag in tags}
            if not any(tag.lower() in image_tags for tag in options.specific_tags):
                return False

        return True

    def score_and_rank(
        self,
        candidates: Sequence[Candidate],
        search_term: str,
        limit: int,
        options: SearchOptions | None = None,
    ) -> list[ScoredCandidate]:
        """
        Score, filter, sort and truncate candidates.

        Sorted by score descending; ties go to the newer image, then to the
        earlier input position.

        Args:
            candidates: Retrieved candidates
            search_term: Normalized search term
            limit: Maximum results to return
            options: Filtering options, defaults to no filtering

        Returns:
            list[ScoredCandidate]: At most ``limit`` results
        """
        options = options or SearchOptions()

        scored = [
            ScoredCandidate(candidate=candidate, score=self.calculate_score(candidate, search_term))
            for candidate in candidates
        ]
        kept = [item for item in scored if self.passes_filters(item, options)]
        kept.sort(key=lambda item: (item.score, _recency_key(item.candidate)), reverse=True)

        logger.debug(
            "Scored search candidates",
            extra={
                "candidate_count": len(scored),
                "kept_count": len(kept),
                "limit": limit,
            },
        )
        return kept[: max(limit, 0)]

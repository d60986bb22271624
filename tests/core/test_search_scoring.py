"""
Test suite for SearchScoringService.

Tests per-field scoring tiers, additive multi-word and multi-tag scoring,
post-scoring filters and the rank ordering.

System role: Verification of the ranking stage
"""

from datetime import datetime, timedelta, timezone

import pytest

from backend.configs.search import ScoringWeights
from backend.core.search.models import ScoredCandidate
from backend.core.search.options import SearchOptions, TagFilter
from backend.core.search.scoring import SearchScoringService

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def scorer() -> SearchScoringService:
    """Provide scorer with default weights."""
    return SearchScoringService()


class TestFieldScoring:
    """Test suite for per-field scoring tiers."""

    @pytest.mark.parametrize(
        "prompt,expected",
        [("cat", 100), ("Cat", 100), ("cat on a mat", 80), ("a black cat", 50), ("dog", 0), ("", 0)],
    )
    def test_prompt_should_use_best_tier_only(self, scorer: SearchScoringService, prompt: str, expected: int) -> None:
        """Test exact, prefix and substring tiers are exclusive."""
        assert scorer.score_prompt(prompt, "cat") == expected

    def test_original_bonus_when_original_differs(self, scorer: SearchScoringService) -> None:
        """Test the user-entered prompt earns a flat bonus."""
        assert scorer.score_original_prompt("sunset photo", "a beautiful sunset, 4k", "sunset") == 25

    def test_no_original_bonus_when_same_as_prompt(self, scorer: SearchScoringService) -> None:
        """Test no bonus when original equals the prompt ignoring case."""
        assert scorer.score_original_prompt("Sunset", "sunset", "sunset") == 0

    def test_no_original_bonus_when_empty(self, scorer: SearchScoringService) -> None:
        """Test missing original never scores."""
        assert scorer.score_original_prompt(None, "sunset", "sunset") == 0

    def test_tags_should_score_each_tag(self, scorer: SearchScoringService) -> None:
        """Test exact, prefix and contains tags add up."""
        # exact 70 + prefix 40 + contains 20
        assert scorer.score_tags(["cat", "catnip", "wildcat", "dog"], "cat") == 130

    def test_provider_and_model_should_both_fire(self, scorer: SearchScoringService) -> None:
        """Test provider and model add the flat weight independently."""
        assert scorer.score_provider_model("openai", "openai-dalle3", "openai") == 60
        assert scorer.score_provider_model("dezgo", "flux", "flux") == 30
        assert scorer.score_provider_model(None, None, "flux") == 0


class TestCalculateScore:
    """Test suite for SearchScoringService.calculate_score()."""

    def test_multi_word_scores_should_add(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test matching both words beats matching one."""
        # Arrange
        both = make_candidate(prompt="cat flux art")
        one = make_candidate(prompt="cat art")

        # Act
        both_score = scorer.calculate_score(both, "cat flux")
        one_score = scorer.calculate_score(one, "cat flux")

        # Assert
        assert both_score == 80 + 50
        assert one_score == 80
        assert both_score > one_score

    def test_two_exact_tags_should_beat_one(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test tag scoring is cumulative across tags."""
        two_tags = make_candidate(prompt="landscape", tags=["sunset", "Sunset"])
        one_tag = make_candidate(prompt="landscape", tags=["sunset"])

        assert scorer.calculate_score(two_tags, "sunset") == 140
        assert scorer.calculate_score(one_tag, "sunset") == 70

    def test_all_fields_should_contribute(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test prompt, original, tags, provider and model sum per word."""
        candidate = make_candidate(
            prompt="flux portrait",
            original="flux",
            tags=["flux"],
            provider="flux-provider",
            model="flux-pro",
        )

        # prompt prefix 80 + original 25 + tag exact 70 + provider 30 + model 30
        assert scorer.calculate_score(candidate, "flux") == 235

    def test_zero_weight_should_disable_match_type(self, make_candidate) -> None:
        """Test a weight of 0 is kept rather than replaced by the default."""
        scorer = SearchScoringService(ScoringWeights(contains=0))

        assert scorer.calculate_score(make_candidate(prompt="a black cat"), "cat") == 0


class TestPassesFilters:
    """Test suite for SearchScoringService.passes_filters()."""

    def test_zero_score_should_never_pass(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test score 0 is dropped even with min_score 0."""
        scored = ScoredCandidate(candidate=make_candidate(prompt="dog"), score=0)

        assert scorer.passes_filters(scored, SearchOptions(min_score=0)) is False

    def test_min_score_should_drop_lower_scores(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test scores below min_score are dropped."""
        options = SearchOptions(min_score=60)

        assert scorer.passes_filters(ScoredCandidate(make_candidate(), 50), options) is False
        assert scorer.passes_filters(ScoredCandidate(make_candidate(), 60), options) is True

    def test_exact_only_should_use_exact_tag_threshold(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test exact_only keeps scores at or above the exact-tag weight."""
        options = SearchOptions(exact_only=True)

        assert scorer.passes_filters(ScoredCandidate(make_candidate(), 69), options) is False
        assert scorer.passes_filters(ScoredCandidate(make_candidate(), 70), options) is True

    def test_exact_only_should_ignore_min_score(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test min_score is not applied when exact_only is set."""
        options = SearchOptions(exact_only=True, min_score=500)

        assert scorer.passes_filters(ScoredCandidate(make_candidate(), 100), options) is True

    def test_with_tags_should_drop_untagged(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test tag_filter=with requires at least one tag."""
        options = SearchOptions(tag_filter=TagFilter.WITH_TAGS)

        assert scorer.passes_filters(ScoredCandidate(make_candidate(tags=[]), 50), options) is False
        assert scorer.passes_filters(ScoredCandidate(make_candidate(tags=["a"]), 50), options) is True

    def test_without_tags_should_drop_tagged(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test tag_filter=without drops tagged candidates regardless of score."""
        options = SearchOptions(tag_filter=TagFilter.WITHOUT_TAGS)

        assert scorer.passes_filters(ScoredCandidate(make_candidate(tags=["a"]), 500), options) is False
        assert scorer.passes_filters(ScoredCandidate(make_candidate(tags=[]), 50), options) is True

    def test_specific_tags_should_match_case_insensitively(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test at least one requested tag must be present."""
        options = SearchOptions(specific_tags=("Mountain", "lake"))

        assert scorer.passes_filters(ScoredCandidate(make_candidate(tags=["mountain"]), 50), options) is True
        assert scorer.passes_filters(ScoredCandidate(make_candidate(tags=["sea"]), 50), options) is False


class TestScoreAndRank:
    """Test suite for SearchScoringService.score_and_rank()."""

    def test_results_should_be_sorted_by_score(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test higher scores come first."""
        contains = make_candidate(prompt="a black cat")
        exact = make_candidate(prompt="cat")
        prefix = make_candidate(prompt="cat nap")

        ranked = scorer.score_and_rank([contains, exact, prefix], "cat", limit=10)

        assert [item.score for item in ranked] == [100, 80, 50]
        assert ranked[0].candidate is exact

    def test_ties_should_prefer_newer_images(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test equal scores are ordered by created_at descending."""
        older = make_candidate(prompt="cat", created_at=BASE_TIME)
        newer = make_candidate(prompt="cat", created_at=BASE_TIME + timedelta(hours=1))

        ranked = scorer.score_and_rank([older, newer], "cat", limit=10)

        assert [item.candidate for item in ranked] == [newer, older]

    def test_full_ties_should_keep_input_order(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test the sort is stable for equal score and timestamp."""
        first = make_candidate(prompt="cat")
        second = make_candidate(prompt="cat")

        ranked = scorer.score_and_rank([first, second], "cat", limit=10)

        assert [item.candidate for item in ranked] == [first, second]

    def test_results_should_be_truncated_to_limit(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test at most limit results come back."""
        candidates = [make_candidate(prompt="cat") for _ in range(5)]

        assert len(scorer.score_and_rank(candidates, "cat", limit=2)) == 2

    def test_non_matching_candidates_should_be_excluded(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test zero-score candidates never reach the output."""
        ranked = scorer.score_and_rank(
            [make_candidate(prompt="dog"), make_candidate(prompt="cat")],
            "cat",
            limit=10,
        )

        assert len(ranked) == 1
        assert all(item.score > 0 for item in ranked)

    def test_exact_only_should_keep_exact_prompt_or_tag_hits(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test exact_only drops substring and provider-only matches."""
        exact_prompt = make_candidate(prompt="cat")
        exact_tag = make_candidate(prompt="portrait", tags=["cat"])
        substring = make_candidate(prompt="a black cat")
        provider_only = make_candidate(prompt="portrait", provider="catai")

        ranked = scorer.score_and_rank(
            [exact_prompt, exact_tag, substring, provider_only],
            "cat",
            limit=10,
            options=SearchOptions(exact_only=True),
        )

        assert {item.candidate.id for item in ranked} == {exact_prompt.id, exact_tag.id}

    def test_without_tags_should_exclude_all_tagged(self, scorer: SearchScoringService, make_candidate) -> None:
        """Test tag_filter=without leaves only untagged results."""
        candidates = [
            make_candidate(prompt="cat", tags=["pet"]),
            make_candidate(prompt="cat"),
            make_candidate(prompt="cat nap", tags=["cat"]),
        ]

        ranked = scorer.score_and_rank(
            candidates, "cat", limit=10, options=SearchOptions(tag_filter=TagFilter.WITHOUT_TAGS)
        )

        assert len(ranked) == 1
        assert ranked[0].candidate.tags == ()

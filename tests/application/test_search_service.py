"""
Test suite for SearchService.

Tests pipeline sequencing with a mocked repository, validation
short-circuiting, configuration wiring and an end-to-end run against the
SQLite test database.

System role: Verification of search use case orchestration
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from backend.boundary.db.search_repository import ImageSearchRepository
from backend.configs.search import ScoringWeights, SearchSettings
from backend.core.search.models import RepositoryPage, SearchResult, SearchValidationFailure
from backend.core.search.options import SearchOptions, TagFilter
from backend.application.services.search_service import SearchService


@pytest.fixture
def mock_repository() -> MagicMock:
    """Provide repository mock returning an empty page."""
    repository = MagicMock(spec=ImageSearchRepository)
    repository.search = AsyncMock(return_value=RepositoryPage(candidates=[], total=0))
    return repository


@pytest.fixture
def search_service(mock_repository: MagicMock) -> SearchService:
    """Provide SearchService with default stages."""
    return SearchService(repository=mock_repository)


class TestSearchServiceValidation:
    """Validation failures come back as values."""

    @pytest.mark.asyncio
    async def test_empty_query_should_return_failure_without_store_access(
        self, search_service: SearchService, mock_repository: MagicMock
    ) -> None:
        """Test an empty query short-circuits before the repository."""
        # Act
        result = await search_service.search("   ")

        # Assert
        assert isinstance(result, SearchValidationFailure)
        assert result.success is False
        assert result.error == "Search query is required"
        assert result.status == 400
        mock_repository.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_overlong_query_should_return_failure(
        self, search_service: SearchService, mock_repository: MagicMock
    ) -> None:
        """Test a query above the limit is rejected with 400."""
        result = await search_service.search("x" * 501)

        assert isinstance(result, SearchValidationFailure)
        assert result.error == "Search query too long (max 500 characters)"
        mock_repository.search.assert_not_awaited()


class TestSearchServicePipeline:
    """Stage sequencing and result assembly."""

    @pytest.mark.asyncio
    async def test_repository_should_receive_normalized_pagination(
        self, search_service: SearchService, mock_repository: MagicMock
    ) -> None:
        """Test skip and clamped limit are forwarded to the repository."""
        # Act
        await search_service.search("cat", page="3", limit="1000")

        # Assert
        kwargs = mock_repository.search.await_args.kwargs
        assert kwargs["skip"] == 200
        assert kwargs["limit"] == 100

    @pytest.mark.asyncio
    async def test_result_should_carry_total_and_meta(
        self, search_service: SearchService, mock_repository: MagicMock, make_candidate
    ) -> None:
        """Test the unfiltered total and metadata are reported."""
        # Arrange
        mock_repository.search.return_value = RepositoryPage(
            candidates=[make_candidate(prompt="cat"), make_candidate(prompt="dog")],
            total=42,
        )

        # Act
        result = await search_service.search("Cat")

        # Assert
        assert isinstance(result, SearchResult)
        assert result.success is True
        assert result.total == 42
        assert len(result.items) == 1
        assert result.meta() == {"query": "cat", "filter": "public", "resultCount": 1}

    @pytest.mark.asyncio
    async def test_authenticated_caller_should_report_authenticated_filter(
        self, search_service: SearchService
    ) -> None:
        """Test the filter label reflects caller identity."""
        result = await search_service.search("cat", user_id=uuid.uuid4())

        assert result.filter == "authenticated"

    @pytest.mark.asyncio
    async def test_options_should_be_applied_and_echoed(
        self, search_service: SearchService, mock_repository: MagicMock, make_candidate
    ) -> None:
        """Test tag filter is applied and options are kept on the result."""
        # Arrange
        mock_repository.search.return_value = RepositoryPage(
            candidates=[make_candidate(prompt="cat", tags=["pet"]), make_candidate(prompt="cat")],
            total=2,
        )
        options = SearchOptions(tag_filter=TagFilter.WITHOUT_TAGS)

        # Act
        result = await search_service.search("cat", options=options)

        # Assert
        assert [item.candidate.tags for item in result.items] == [()]
        assert result.applied_options is options

    @pytest.mark.asyncio
    async def test_store_errors_should_propagate(
        self, search_service: SearchService, mock_repository: MagicMock
    ) -> None:
        """Test repository failures are not swallowed."""
        mock_repository.search.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(OperationalError):
            await search_service.search("cat")

    @pytest.mark.asyncio
    async def test_sunset_scenario_should_rank_by_configured_weights(
        self, search_service: SearchService, mock_repository: MagicMock, make_candidate
    ) -> None:
        """Test the exact tag hit (70) outranks the prompt substring hit (50)."""
        # Arrange
        prompt_hit = make_candidate(prompt="a sunset over water")
        tag_hit = make_candidate(prompt="evening sky", tags=["sunset"])
        mock_repository.search.return_value = RepositoryPage(candidates=[prompt_hit, tag_hit], total=2)

        # Act
        result = await search_service.search("Sunset")

        # Assert
        assert [item.candidate for item in result.items] == [tag_hit, prompt_hit]
        assert [item.score for item in result.items] == [70, 50]


class TestSearchServiceConfiguration:
    """Settings wiring."""

    def test_from_settings_should_apply_limits_and_weights(self, mock_repository: MagicMock) -> None:
        """Test validator limits and scoring weights come from settings."""
        # Arrange
        settings = SearchSettings(
            max_query_length=20,
            max_limit=10,
            default_limit=5,
            scoring=ScoringWeights(exact_match=150),
        )

        # Act
        service = SearchService.from_settings(mock_repository, settings)

        # Assert
        assert service.validator.max_query_length == 20
        assert service.validator.max_limit == 10
        assert service.validator.default_limit == 5
        assert service.scorer.weights.exact_match == 150

    def test_build_response_should_delegate_to_transformer(self, search_service: SearchService) -> None:
        """Test the envelope carries request id and duration."""
        # Arrange
        result = SearchResult(
            items=[],
            total=0,
            pagination=search_service.validator.normalize_pagination(),
            search_term="cat",
            filter="public",
            applied_options=SearchOptions(),
        )

        # Act
        response = search_service.build_response(result, request_id="abc", duration_ms=5)

        # Assert
        assert response.request_id == "abc"
        assert response.duration == "5ms"
        assert response.data.has_more is False


class TestSearchServiceEndToEnd:
    """Full pipeline against the SQLite test database."""

    @pytest.fixture
    def live_service(self, session_factory) -> SearchService:
        """SearchService over a real repository."""
        return SearchService(repository=ImageSearchRepository(session_factory))

    @pytest.mark.asyncio
    async def test_sunset_search_should_exclude_private_and_rank(
        self, live_service: SearchService, seed_user, seed_image
    ) -> None:
        """Test anonymous search returns the two public hits in score order."""
        # Arrange
        owner = await seed_user("painter")
        water = await seed_image(prompt="a sunset over water", user_id=owner)
        exact = await seed_image(prompt="sunset", tags=["sunset"], user_id=owner)
        await seed_image(prompt="sunset", is_public=False, user_id=owner)

        # Act
        result = await live_service.search("Sunset")

        # Assert
        assert [item.candidate.id for item in result.items] == [exact, water]
        assert [item.score for item in result.items] == [170, 50]
        assert result.total == 2
        assert all(item.candidate.username == "painter" for item in result.items)

    @pytest.mark.asyncio
    async def test_tag_only_match_should_be_recalled(
        self, live_service: SearchService, seed_user, seed_image
    ) -> None:
        """Test an image whose only hit is a tag is fetched and ranked."""
        # Arrange
        owner = await seed_user("painter")
        stranger = await seed_user("stranger")
        water = await seed_image(prompt="a sunset over water", user_id=owner)
        tagged = await seed_image(prompt="evening sky", tags=["sunset"], user_id=owner)
        await seed_image(prompt="sunset", is_public=False, user_id=stranger)

        # Act
        result = await live_service.search("Sunset")

        # Assert
        assert [item.candidate.id for item in result.items] == [tagged, water]
        assert [item.score for item in result.items] == [70, 50]
        assert result.total == 2

    @pytest.mark.asyncio
    async def test_identical_requests_should_be_idempotent(
        self, live_service: SearchService, seed_image
    ) -> None:
        """Test repeated searches give identical ordering and total."""
        # Arrange
        for i in range(6):
            await seed_image(prompt="lake" if i % 2 else f"lake view {i}")

        # Act
        first = await live_service.search("lake", limit=4)
        second = await live_service.search("lake", limit=4)

        # Assert
        assert [item.candidate.id for item in first.items] == [item.candidate.id for item in second.items]
        assert first.total == second.total == 6

    @pytest.mark.asyncio
    async def test_owner_should_find_own_private_image(
        self, live_service: SearchService, seed_user, seed_image
    ) -> None:
        """Test authenticated callers see their private images."""
        # Arrange
        owner = await seed_user("owner")
        private = await seed_image(prompt="secret garden", is_public=False, user_id=owner)

        # Act
        as_owner = await live_service.search("garden", user_id=owner)
        as_anonymous = await live_service.search("garden")

        # Assert
        assert [item.candidate.id for item in as_owner.items] == [private]
        assert as_anonymous.items == []
        assert as_anonymous.total == 0

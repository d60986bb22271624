"""
Image search repository.

Executes a search predicate against the image store: a bounded,
over-fetched, recency-ordered fetch and an unbounded match count run
concurrently on separate sessions. Fetched rows are then enriched with
owner usernames using one bulk lookup.

Dependencies: sqlalchemy, backend.boundary.db.CRUD, backend.core.search.models
System role: Recall stage data access for image search
"""

import asyncio
import logging

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.boundary.db.CRUD.image_crud import ImageCRUD, image_crud as default_image_crud
from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud as default_user_crud
from backend.boundary.db.models.image_model import ImageModel
from backend.core.search.models import Candidate, RepositoryPage, UNKNOWN_USERNAME

logger = logging.getLogger(__name__)


def image_to_candidate(image: ImageModel) -> Candidate:
    """
    Convert an ImageModel row into a search Candidate.

    Args:
        image: Loaded ImageModel

    Returns:
        Candidate: Detached, immutable copy of the searchable fields
    """
    return Candidate(
        id=image.id,
        image_url=image.image_url,
        prompt=image.prompt or "",
        original=image.original,
        provider=image.provider,
        model=image.model,
        guidance=image.guidance,
        tags=tuple(tag for tag in (image.tags or []) if isinstance(tag, str)),
        rating=image.rating or 0,
        is_public=bool(image.is_public),
        is_hidden=bool(image.is_hidden),
        tagged_at=image.tagged_at,
        created_at=image.created_at,
        user_id=image.user_id,
    )


class ImageSearchRepository:
    """
    Read-only search access to images and their owners.

    Holds only a session factory and immutable settings, so one instance
    can serve concurrent requests.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        overfetch_multiplier: int = 2,
        images: ImageCRUD | None = None,
        users: UserCRUD | None = None,
    ) -> None:
        """
        Initialize repository.

        Args:
            session_factory: Factory for independent async sessions
            overfetch_multiplier: Rows fetched per requested result
            images: Image CRUD (defaults to module singleton)
            users: User CRUD (defaults to module singleton)
        """
        self.session_factory = session_factory
        self.overfetch_multiplier = max(1, overfetch_multiplier)
        self.images = images or default_image_crud
        self.users = users or default_user_crud

    async def search(self, predicate: ColumnElement[bool], skip: int, limit: int) -> RepositoryPage:
        """
        Fetch over-fetched candidates and the total match count.

        Args:
            predicate: Access + text clause
            skip: Rows to skip
            limit: Requested page size (fetch is limit * overfetch_multiplier)

        Returns:
            RepositoryPage: Enriched candidates and unfiltered total

        Raises:
            SQLAlchemyError: Propagated unmodified from the store
        """
        fetch_limit = limit * self.overfetch_multiplier

        # Both operations finish before any error is raised
        candidates, total = await asyncio.gather(
            self._fetch_candidates(predicate, skip, fetch_limit),
            self._count(predicate),
            return_exceptions=True,
        )
        for outcome in (candidates, total):
            if isinstance(outcome, BaseException):
                raise outcome

        logger.info(
            "Search candidates retrieved",
            extra={
                "skip": skip,
                "fetch_limit": fetch_limit,
                "fetched": len(candidates),
                "total": total,
            },
        )
        return RepositoryPage(candidates=candidates, total=total)

    async def _fetch_candidates(
        self,
        predicate: ColumnElement[bool],
        skip: int,
        fetch_limit: int,
    ) -> list[Candidate]:
        async with self.session_factory() as session:
            images = await self.images.find_matching(session, predicate, offset=skip, limit=fetch_limit)
            candidates = [image_to_candidate(image) for image in images]
            return await self.enrich_usernames(session, candidates)

    async def _count(self, predicate: ColumnElement[bool]) -> int:
        async with self.session_factory() as session:
            return await self.images.count_matching(session, predicate)

    async def enrich_usernames(self, session: AsyncSession, candidates: list[Candidate]) -> list[Candidate]:
        """
        Attach owner usernames using one bulk lookup.

        Candidates without an owner, or whose owner no longer exists, get
        the "Unknown" display name.

        Args:
            session: Async database session
            candidates: Candidates to enrich

        Returns:
            list[Candidate]: New candidates carrying usernames, same order
        """
        owner_ids = {candidate.user_id for candidate in candidates if candidate.user_id is not None}
        usernames = await self.users.get_usernames(session, owner_ids) if owner_ids else {}

        return [
            candidate.with_username(usernames.get(candidate.user_id, UNKNOWN_USERNAME))
            for candidate in candidates
        ]

"""
Image CRUD operations for search retrieval.

Extends BaseCRUD with the recency-ordered, predicate-filtered fetch and
the matching count used by the search recall stage.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Image reads for the search pipeline
"""

from typing import Sequence

from sqlalchemy import ColumnElement, desc
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.models.image_model import ImageModel
from backend.boundary.db.CRUD.base_crud import BaseCRUD


class ImageCRUD(BaseCRUD[ImageModel]):
    """
    CRUD operations for ImageModel.

    Ordering is newest first with the primary key as a stable tie-break,
    so identical requests page identically.
    """

    def __init__(self) -> None:
        """Initialize ImageCRUD with ImageModel."""
        super().__init__(ImageModel)

    async def find_matching(
        self,
        session: AsyncSession,
        predicate: ColumnElement[bool],
        offset: int = 0,
        limit: int | None = None,
    ) -> Sequence[ImageModel]:
        """
        Retrieve images matching a search predicate, newest first.

        Args:
            session: Async database session
            predicate: Access + text clause from the query builder
            offset: Number of images to skip
            limit: Maximum number of images to return

        Returns:
            Sequence of matching ImageModels ordered by created_at, id descending
        """
        return await self.find_where(
            session,
            predicate,
            order_by=(desc(ImageModel.created_at), desc(ImageModel.id)),
            limit=limit,
            offset=offset,
        )

    async def count_matching(self, session: AsyncSession, predicate: ColumnElement[bool]) -> int:
        """
        Count all images matching a search predicate.

        Args:
            session: Async database session
            predicate: Access + text clause from the query builder

        Returns:
            Unpaginated match count
        """
        return await self.count_where(session, predicate)


image_crud = ImageCRUD()

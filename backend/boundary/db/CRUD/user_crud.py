"""
User CRUD operations.

Bulk username resolution for search result enrichment.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Owner display name lookup
"""

from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_usernames(self, session: AsyncSession, user_ids: Iterable[UUID]) -> dict[UUID, str]:
        """
        Resolve usernames for a set of user ids with a single query.

        Args:
            session: Async database session
            user_ids: User ids to resolve

        Returns:
            Mapping of found user id to username; unknown ids are absent
        """
        id_list = list(dict.fromkeys(user_ids))
        if not id_list:
            return {}
        stmt = select(UserModel.id, UserModel.username).where(UserModel.id.in_(id_list))
        result = await session.execute(stmt)
        return {row.id: row.username for row in result.all()}


user_crud = UserCRUD()

"""
Base CRUD operations for SQLAlchemy models.

Provides generic predicate-driven read operations (filtered fetch and
count) that model-specific CRUD classes build on.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar, Sequence

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any SQLAlchemy model.
    Subclasses should specify the model class and can override or extend
    these methods for model-specific behavior.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def find_where(
        self,
        session: AsyncSession,
        predicate: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve records matching a predicate with ordering and pagination.

        Args:
            session: Async database session
            predicate: SQLAlchemy boolean clause
            order_by: Ordering expressions, applied in sequence
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).where(predicate).order_by(*order_by).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_where(self, session: AsyncSession, predicate: ColumnElement[bool]) -> int:
        """
        Count records matching a predicate.

        Args:
            session: Async database session
            predicate: SQLAlchemy boolean clause

        Returns:
            Number of matching rows
        """
        stmt = select(func.count()).select_from(self.model).where(predicate)
        result = await session.execute(stmt)
        return int(result.scalar_one())


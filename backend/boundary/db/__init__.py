"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - UserModel, ImageModel: Core domain entities
  - image_crud, user_crud: CRUD operation singletons
  - ImageSearchRepository: Predicate-driven search reads

Dependencies: sqlalchemy, backend.configs
System role: Database adapter providing read access to images and owners
for the search pipeline.
"""

from backend.boundary.db.base import Base, TimestampMixin, UUIDMixin
from backend.boundary.db.connection import (
    dispose_async_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.models.image_model import ImageModel
from backend.boundary.db.CRUD import (
    BaseCRUD,
    ImageCRUD,
    UserCRUD,
    image_crud,
    user_crud,
)
from backend.boundary.db.search_repository import ImageSearchRepository, image_to_candidate

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "dispose_async_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UserModel",
    "ImageModel",
    # CRUD classes
    "BaseCRUD",
    "ImageCRUD",
    "UserCRUD",
    # CRUD singletons
    "image_crud",
    "user_crud",
    # Search
    "ImageSearchRepository",
    "image_to_candidate",
]

"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from backend.boundary.db.CRUD import image_crud, user_crud

    # Use singleton instances
    total = await image_crud.count_matching(db, predicate)

    # Or instantiate classes directly for custom behavior
    from backend.boundary.db.CRUD import ImageCRUD
    custom_crud = ImageCRUD()
"""

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.CRUD.image_crud import ImageCRUD, image_crud
from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = [
    "BaseCRUD",
    "ImageCRUD",
    "image_crud",
    "UserCRUD",
    "user_crud",
]

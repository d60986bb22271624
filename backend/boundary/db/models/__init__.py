"""
Database models package.

Exports:
  - UserModel: Image owner ORM model
  - ImageModel: Generated image ORM model

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.user_model import UserModel
from backend.boundary.db.models.image_model import ImageModel

__all__ = [
    "UserModel",
    "ImageModel",
]

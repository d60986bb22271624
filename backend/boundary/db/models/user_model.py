"""
User ORM model.

Minimal owner record used to resolve display usernames for image
search results. Account management lives outside this service.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Image ownership and display name lookup
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserModel(Base, UUIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        username: Unique public display name
        email: Optional contact address
        created_at: Account creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        images: Images owned by this user
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        doc="Public display name shown next to images",
    )

    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        doc="Contact address (never exposed by search)",
    )

    # Relationships
    images = relationship("ImageModel", back_populates="user")

"""
Image ORM model for generated images.

Represents a generated image with its prompts, generation provider/model,
tags and visibility flags. Searchable text lives in prompt, original,
provider, model and the JSON tags array.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Image persistence queried by the search pipeline
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ImageModel(Base, UUIDMixin, TimestampMixin):
    """
    Image ORM model for generated images.

    Attributes:
        id: UUID primary key (auto-generated)
        image_url: Storage URL of the rendered image
        prompt: Prompt sent to the provider (possibly AI-enhanced)
        original: Prompt as typed by the user before enhancement
        provider: Generation provider name (e.g. openai, dezgo)
        model: Provider model identifier (e.g. flux, dalle3)
        guidance: Guidance scale used for generation
        is_public: Visible to everyone when True, owner only otherwise
        is_hidden: Hidden by moderation, never searchable
        is_deleted: Soft-deleted, never searchable
        rating: Aggregate user rating
        tags: JSON array of tag strings (may be empty)
        tagged_at: When tags were last assigned
        user_id: Owning user (nullable for system images)
        created_at: Generation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)

    Relationships:
        user: Owning UserModel (back_populates=images)

    Constraints:
        user_id: Foreign key ON DELETE SET NULL to users.id
    """

    __tablename__ = "images"
    __table_args__ = (
        Index("ix_images_visibility_created", "is_deleted", "is_hidden", "is_public", "created_at"),
        Index("ix_images_user_id", "user_id"),
    )

    image_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        doc="Storage URL of the rendered image",
    )

    prompt: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Prompt sent to the provider",
    )

    original: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="User-entered prompt before enhancement",
    )

    provider: Mapped[str | None] = mapped_column(String(100), nullable=True)

    model: Mapped[str | None] = mapped_column(String(100), nullable=True)

    guidance: Mapped[float | None] = mapped_column(Float, nullable=True)

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    tags: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc="Array of tag strings",
    )

    tagged_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        doc="Owning user",
    )

    # Relationships
    user = relationship("UserModel", back_populates="images")

"""
Image search response schemas.

External contract for GET /search/images. Field names are camelCase on
the wire (aliases) and snake_case in Python.

Dependencies: pydantic
System role: Image search API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageSearchItem(CamelModel):
    """
    Public shape of one search hit.

    ``url`` is the external name of the image location; ``image_url`` is
    kept for older clients. The relevance score is not exposed.
    """

    id: uuid.UUID
    url: str
    image_url: str
    prompt: str
    original: str | None = None
    provider: str | None = None
    model: str | None = None
    guidance: float | None = None
    tags: list[str] = Field(default_factory=list)
    rating: int = 0
    is_public: bool
    is_hidden: bool = False
    tagged_at: datetime | None = None
    created_at: datetime | None = None
    user_id: uuid.UUID | None = None
    username: str


class SearchPaginationInfo(CamelModel):
    """Pagination block; ``total`` is the unfiltered predicate match count."""

    page: int
    limit: int
    total: int


class SearchMeta(CamelModel):
    """Diagnostic metadata for a search response."""

    query: str
    filter: str = Field(description="'authenticated' or 'public'")
    result_count: int


class SearchData(CamelModel):
    """Payload of a successful search."""

    items: list[ImageSearchItem]
    pagination: SearchPaginationInfo
    has_more: bool
    meta: SearchMeta


class SearchResponse(CamelModel):
    """Success envelope for image search."""

    success: bool = True
    data: SearchData
    request_id: str
    duration: str = Field(description="Elapsed time formatted as '<ms>ms'")


class SearchFailureResponse(BaseModel):
    """Envelope for a rejected search query."""

    success: bool = False
    message: str


class SearchErrorResponse(CamelModel):
    """Envelope for an unexpected search failure."""

    success: bool = False
    error: str
    request_id: str
    duration: str

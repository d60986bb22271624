"""
Search predicate construction.

Translates a normalized search term and caller identity into a SQLAlchemy
boolean clause: an access clause AND a text clause. The text clause is
deliberately broad (any word in any searchable field) so the scoring stage
has a rich candidate pool to rank.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Recall stage predicate builder
"""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy import ColumnElement, String, and_, cast, false, or_

from backend.boundary.db.models.image_model import ImageModel
from backend.core.search.validator import split_words


@dataclass(frozen=True)
class SearchableField:
    """A text column the recall stage matches words against."""

    name: str
    column: ColumnElement[str]


DEFAULT_SEARCHABLE_FIELDS: tuple[SearchableField, ...] = (
    SearchableField("prompt", ImageModel.prompt),
    SearchableField("original", ImageModel.original),
    SearchableField("provider", ImageModel.provider),
    SearchableField("model", ImageModel.model),
    # JSON array rendered as text; matches any tag containing the word
    SearchableField("tags", cast(ImageModel.tags, String)),
)


class SearchQueryBuilder:
    """
    Build search predicates over ImageModel.

    The access clause is always a separate top-level AND operand. For
    authenticated callers it contains its own OR (owned-by OR public),
    which is grouped on its own so it can never merge with the text OR.
    """

    def __init__(self, fields: Sequence[SearchableField] = DEFAULT_SEARCHABLE_FIELDS) -> None:
        """
        Initialize builder with the searchable fields.

        Args:
            fields: Text columns matched by each query word
        """
        self.fields: tuple[SearchableField, ...] = tuple(fields)

    def with_field(self, field: SearchableField) -> "SearchQueryBuilder":
        """Return a builder that also searches ``field``."""
        return SearchQueryBuilder((*self.fields, field))

    @property
    def field_names(self) -> list[str]:
        """Names of the searchable fields, in match order."""
        return [field.name for field in self.fields]

    def build_access_clause(self, caller_id: UUID | None) -> ColumnElement[bool]:
        """
        Visibility clause for the caller.

        Anonymous callers see public images only; authenticated callers also
        see their own private images. Deleted and hidden images are never
        visible.
        """
        visibility = or_(ImageModel.user_id == caller_id, ImageModel.is_public.is_(True)) \
            if caller_id is not None else ImageModel.is_public.is_(True)

        return and_(
            ImageModel.is_deleted.is_(False),
            ImageModel.is_hidden.is_(False),
            visibility.self_group(),
        )

    def build_text_clause(self, words: Sequence[str]) -> ColumnElement[bool]:
        """
        OR of a case-insensitive contains condition per word and field.

        An empty word list yields an OR over nothing, which matches no rows.
        """
        conditions = [
            field.column.icontains(word, autoescape=True)
            for word in words
            for field in self.fields
        ]
        if not conditions:
            return false()
        return or_(*conditions)

    def build_predicate(self, caller_id: UUID | None, normalized_term: str) -> ColumnElement[bool]:
        """
        Combine access and text clauses for a normalized search term.

        Args:
            caller_id: Authenticated user id, None for anonymous callers
            normalized_term: Lower-cased, trimmed search term

        Returns:
            ColumnElement[bool]: access_clause AND text_clause
        """
        words = split_words(normalized_term)
        access_clause = self.build_access_clause(caller_id)
        text_clause = self.build_text_clause(words)
        return and_(access_clause, text_clause.self_group())

"""Base models and mixins for SQLModel schemas.

Usage:
    - Database models (table=True) inherit from TimestampedTable
    - Response schemas use TimestampResponseMixin for timestamp fields
    - Paginated list responses use PaginatedResponse[T]

Example:
    class Language(LanguageBase, TimestampedTable, table=True):
        ...
"""

from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(UTC)


class IntPrimaryKeyMixin(SQLModel):
    """Auto-increment integer primary key, assigned on flush."""

    id: int | None = Field(default=None, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps for audit trail."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TimestampedTable(IntPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps.

    Use for: Language, Tag, Translation
    """

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class PageMeta(SQLModel):
    current_page: int
    last_page: int
    per_page: int
    total: int


class PaginatedResponse(SQLModel, Generic[T]):
    """Standard paginated response wrapper.

    Example:
        @router.get("/translations", response_model=PaginatedResponse[TranslationPublic])
        def list_translations(...):
            return PaginatedResponse(data=rows, meta=PageMeta(...))
    """

    data: list[T]
    meta: PageMeta

from typing import TYPE_CHECKING

from sqlalchemy import Column, Index, Text
from sqlmodel import Field, Relationship, SQLModel

from polyglot.core.base_models import TimestampedTable, TimestampResponseMixin
from polyglot.languages.models import LanguagePublic, LanguageSummary
from polyglot.tags.models import TagSummary, TagTranslation

if TYPE_CHECKING:
    from polyglot.languages.models import Language
    from polyglot.tags.models import Tag

DEFAULT_GROUP = "general"


class TranslationBase(SQLModel):
    key: str = Field(min_length=1, max_length=255)
    value: str = Field(sa_column=Column(Text, nullable=False))
    group: str = Field(default=DEFAULT_GROUP, min_length=1, max_length=255)


class Translation(TranslationBase, TimestampedTable, table=True):
    """A value for one key, written in one language.

    Nothing makes (key, language_id, group) unique; the same key is
    expected once per language and duplicates are stored as given.
    """

    __table_args__ = (
        Index("ix_translation_key", "key"),
        Index("ix_translation_group", "group"),
        Index("ix_translation_key_language_id", "key", "language_id"),
        Index("ix_translation_language_id_group", "language_id", "group"),
    )

    language_id: int = Field(
        foreign_key="language.id", nullable=False, ondelete="CASCADE"
    )
    language: "Language" = Relationship(back_populates="translations")
    tags: list["Tag"] = Relationship(
        back_populates="translations",
        link_model=TagTranslation,
        sa_relationship_kwargs={"order_by": "Tag.id"},
    )


class TranslationCreate(SQLModel):
    key: str = Field(min_length=1, max_length=255)
    value: str = Field(min_length=1)
    language_id: int
    # null falls back to the default group
    group: str | None = Field(default=DEFAULT_GROUP, min_length=1, max_length=255)
    tags: list[int] | None = None


class TranslationUpdate(SQLModel):
    """Partial update; only fields present in the request are applied.

    An empty string is stored as given. ``tags`` present (even empty)
    replaces the whole tag set.
    """

    key: str | None = Field(default=None, max_length=255)
    value: str | None = None
    language_id: int | None = None
    group: str | None = Field(default=None, max_length=255)
    tags: list[int] | None = None


class TranslationFilters(SQLModel):
    language: str | None = None
    group: str | None = None
    tag: str | None = None
    key: str | None = None


class TranslationPublic(TimestampResponseMixin):
    id: int
    key: str
    value: str
    language_id: int
    group: str
    language: LanguageSummary
    tags: list[TagSummary]


class TranslationWithLanguage(TranslationPublic):
    """Cross-language lookup row carrying the full language record."""

    language: LanguagePublic

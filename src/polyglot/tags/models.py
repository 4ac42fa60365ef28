from typing import TYPE_CHECKING

from sqlalchemy import Column, Text
from sqlmodel import Field, Relationship, SQLModel

from polyglot.core.base_models import TimestampedTable, TimestampResponseMixin

if TYPE_CHECKING:
    from polyglot.translations.models import Translation


class TagTranslation(SQLModel, table=True):
    """Join row between a translation and one of its tags."""

    __tablename__ = "tag_translation"

    translation_id: int = Field(
        foreign_key="translation.id", primary_key=True, ondelete="CASCADE"
    )
    tag_id: int = Field(
        foreign_key="tag.id", primary_key=True, ondelete="CASCADE", index=True
    )


class TagBase(SQLModel):
    name: str = Field(min_length=1, max_length=255, unique=True, index=True)
    description: str | None = Field(default=None, sa_column=Column(Text))


class Tag(TagBase, TimestampedTable, table=True):
    """Categorization label attached to translations.

    Deleting a tag only removes its association rows.
    """

    translations: list["Translation"] = Relationship(
        back_populates="tags",
        link_model=TagTranslation,
        sa_relationship_kwargs={"order_by": "Translation.id"},
    )


class TagCreate(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class TagUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class TagPublic(TimestampResponseMixin):
    id: int
    name: str
    description: str | None


class TagSummary(SQLModel):
    """Embedded in translation payloads."""

    id: int
    name: str


class TaggedTranslation(SQLModel):
    """A translation as listed under the tag it carries."""

    id: int
    key: str
    value: str
    language_id: int
    group: str


class TagWithTranslations(TagPublic):
    translations: list[TaggedTranslation]

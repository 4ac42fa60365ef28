from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

from polyglot.core.base_models import TimestampedTable, TimestampResponseMixin

if TYPE_CHECKING:
    from polyglot.translations.models import Translation


class LanguageBase(SQLModel):
    code: str = Field(min_length=1, max_length=10, unique=True, index=True)
    name: str = Field(min_length=1, max_length=255)
    is_active: bool = True


class Language(LanguageBase, TimestampedTable, table=True):
    """A language translations can be written in.

    Deleting a language deletes every translation written in it.
    """

    translations: list["Translation"] = Relationship(
        back_populates="language",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class LanguageCreate(SQLModel):
    code: str = Field(min_length=1, max_length=10)
    name: str = Field(min_length=1, max_length=255)
    is_active: bool = True


class LanguageUpdate(SQLModel):
    code: str | None = Field(default=None, min_length=1, max_length=10)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None


class LanguageListItem(SQLModel):
    id: int
    code: str
    name: str
    is_active: bool


class LanguagePublic(LanguageListItem, TimestampResponseMixin):
    pass


class LanguageSummary(SQLModel):
    """Embedded in translation payloads."""

    id: int
    code: str
    name: str

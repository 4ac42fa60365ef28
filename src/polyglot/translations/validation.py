from collections.abc import Sequence

from sqlmodel import Session, select

from polyglot.core.validation import FieldError, check_not_null
from polyglot.languages.models import Language
from polyglot.tags.models import Tag
from polyglot.translations.models import TranslationCreate, TranslationUpdate

LANGUAGE_INVALID = "The selected language is invalid."
TAGS_INVALID = "One or more selected tags are invalid."


def check_language_exists(session: Session, language_id: int) -> list[FieldError]:
    if session.get(Language, language_id) is None:
        return [FieldError("language_id", LANGUAGE_INVALID)]
    return []


def check_tags_exist(session: Session, tag_ids: Sequence[int]) -> list[FieldError]:
    """One error per entry of ``tag_ids`` that names no tag, keyed by position."""
    if not tag_ids:
        return []
    found = set(session.exec(select(Tag.id).where(Tag.id.in_(set(tag_ids)))).all())
    return [
        FieldError(f"tags.{index}", TAGS_INVALID)
        for index, tag_id in enumerate(tag_ids)
        if tag_id not in found
    ]


def validate_translation_create(
    session: Session, translation_in: TranslationCreate
) -> list[FieldError]:
    errors = check_language_exists(session, translation_in.language_id)
    errors += check_tags_exist(session, translation_in.tags or [])
    return errors


def validate_translation_update(
    session: Session, translation_in: TranslationUpdate
) -> list[FieldError]:
    data = translation_in.model_dump(exclude_unset=True)
    errors = check_not_null(data, ("key", "value", "language_id", "group", "tags"))
    if data.get("language_id") is not None:
        errors += check_language_exists(session, data["language_id"])
    if data.get("tags"):
        errors += check_tags_exist(session, data["tags"])
    return errors


def validate_key_lookup(key: str | None) -> list[FieldError]:
    if not key:
        return [FieldError("key", "The translation key is required.")]
    return []

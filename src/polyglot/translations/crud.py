from collections.abc import Iterable

from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, delete, select
from sqlmodel.sql.expression import SelectOfScalar

from polyglot.core.base_models import PageMeta, utcnow
from polyglot.core.db import last_page, paginate
from polyglot.core.exceptions import ResourceNotFoundError
from polyglot.core.logging import get_logger
from polyglot.core.uow import atomic
from polyglot.core.validation import raise_for_errors
from polyglot.languages.models import Language
from polyglot.tags.models import Tag, TagTranslation
from polyglot.translations.models import (
    DEFAULT_GROUP,
    Translation,
    TranslationCreate,
    TranslationFilters,
    TranslationUpdate,
)
from polyglot.translations.validation import (
    validate_translation_create,
    validate_translation_update,
)

logger = get_logger(__name__)

DEFAULT_PER_PAGE = 50
MAX_PER_PAGE = 100


def clamp_per_page(per_page: int | None) -> int:
    if per_page is None:
        return DEFAULT_PER_PAGE
    return min(max(per_page, 1), MAX_PER_PAGE)


def clamp_page(page: int | None) -> int:
    if page is None:
        return 1
    return max(page, 1)


def _with_relations() -> SelectOfScalar[Translation]:
    return select(Translation).options(
        selectinload(Translation.language),  # type: ignore[arg-type]
        selectinload(Translation.tags),  # type: ignore[arg-type]
    )


def apply_filters(
    statement: SelectOfScalar[Translation], filters: TranslationFilters
) -> SelectOfScalar[Translation]:
    """AND together every filter that was given.

    ``tag`` matches when any attached tag has that name; ``key`` is a
    case-sensitive substring match.
    """
    if filters.language is not None:
        statement = statement.where(
            col(Translation.language).has(Language.code == filters.language)
        )
    if filters.group is not None:
        statement = statement.where(Translation.group == filters.group)
    if filters.tag is not None:
        statement = statement.where(col(Translation.tags).any(Tag.name == filters.tag))
    if filters.key is not None:
        statement = statement.where(
            col(Translation.key).contains(filters.key, autoescape=True)
        )
    return statement


def get_translations(
    *,
    session: Session,
    filters: TranslationFilters | None = None,
    page: int | None = None,
    per_page: int | None = None,
) -> tuple[list[Translation], PageMeta]:
    """Get one page of translations matching ``filters``.

    Args:
        session: Database session
        filters: Optional language/group/tag/key filters
        page: 1-indexed page, defaults to 1
        per_page: Page size, clamped to [1, 100], defaults to 50

    Returns:
        Tuple of (translations ordered by id, page metadata)
    """
    page = clamp_page(page)
    per_page = clamp_per_page(per_page)
    statement = apply_filters(_with_relations(), filters or TranslationFilters())

    translations, total = paginate(
        session, statement, page=page, per_page=per_page, order_by=Translation.id
    )
    meta = PageMeta(
        current_page=page,
        last_page=last_page(total, per_page),
        per_page=per_page,
        total=total,
    )
    return translations, meta


def get_translation(*, session: Session, translation_id: int) -> Translation:
    """Get a translation with its language and tags loaded.

    Raises:
        ResourceNotFoundError: If no translation has this ID
    """
    statement = _with_relations().where(Translation.id == translation_id)
    translation = session.exec(statement).first()
    if translation is None:
        raise ResourceNotFoundError("Translation", translation_id)
    return translation


def get_translations_by_key(
    *, session: Session, key: str, group: str | None = None
) -> list[Translation]:
    """Get every translation of ``key``, one per language in practice."""
    statement = _with_relations().where(Translation.key == key)
    if group is not None:
        statement = statement.where(Translation.group == group)
    statement = statement.order_by(col(Translation.id))
    return list(session.exec(statement).all())


def attach_tags(*, session: Session, translation_id: int, tag_ids: Iterable[int]) -> list[int]:
    """Insert join rows for ``tag_ids``; duplicates in the input collapse."""
    attached = sorted(set(tag_ids))
    session.add_all(
        TagTranslation(translation_id=translation_id, tag_id=tag_id)
        for tag_id in attached
    )
    session.flush()
    return attached


def sync_tags(
    *, session: Session, translation_id: int, tag_ids: Iterable[int]
) -> tuple[list[int], list[int]]:
    """Make the translation's tag set exactly ``tag_ids``.

    Runs inside the caller's transaction.

    Returns:
        Tuple of (attached tag ids, detached tag ids)
    """
    current = set(
        session.exec(
            select(TagTranslation.tag_id).where(
                TagTranslation.translation_id == translation_id
            )
        ).all()
    )
    requested = set(tag_ids)

    detached = sorted(current - requested)
    if detached:
        session.exec(
            delete(TagTranslation).where(  # type: ignore[call-overload]
                col(TagTranslation.translation_id) == translation_id,
                col(TagTranslation.tag_id).in_(detached),
            )
        )
    attached = attach_tags(
        session=session, translation_id=translation_id, tag_ids=requested - current
    )
    return attached, detached


def create_translation(
    *, session: Session, translation_in: TranslationCreate
) -> Translation:
    """Create a translation and attach its tags in one transaction.

    Raises:
        ValidationError: If the language or any tag does not exist;
            nothing is written in that case
    """
    raise_for_errors(validate_translation_create(session, translation_in))

    db_translation = Translation(
        key=translation_in.key,
        value=translation_in.value,
        language_id=translation_in.language_id,
        group=translation_in.group or DEFAULT_GROUP,
    )
    with atomic(session) as uow:
        uow.session.add(db_translation)
        uow.flush()
        assert db_translation.id is not None
        tag_ids = attach_tags(
            session=uow.session,
            translation_id=db_translation.id,
            tag_ids=translation_in.tags or [],
        )

    logger.info(
        "translation_created",
        translation_id=db_translation.id,
        language_id=translation_in.language_id,
        tag_ids=tag_ids,
    )
    return get_translation(session=session, translation_id=db_translation.id)


def update_translation(
    *, session: Session, translation_id: int, translation_in: TranslationUpdate
) -> Translation:
    """Apply the fields present in ``translation_in``.

    Fields left out of the request keep their stored values. When ``tags``
    is present the tag set is replaced by it; otherwise tags are untouched.

    Raises:
        ResourceNotFoundError: If no translation has this ID
        ValidationError: If a field is null, or the language or a tag
            does not exist
    """
    db_translation = get_translation(session=session, translation_id=translation_id)
    raise_for_errors(validate_translation_update(session, translation_in))

    translation_data = translation_in.model_dump(exclude_unset=True)
    tag_ids = translation_data.pop("tags", None)
    with atomic(session) as uow:
        db_translation.sqlmodel_update(translation_data)
        db_translation.updated_at = utcnow()
        uow.session.add(db_translation)
        uow.flush()
        if tag_ids is not None:
            attached, detached = sync_tags(
                session=uow.session, translation_id=translation_id, tag_ids=tag_ids
            )
            logger.info(
                "tags_synced",
                translation_id=translation_id,
                attached=attached,
                detached=detached,
            )

    logger.info(
        "translation_updated",
        translation_id=translation_id,
        fields=sorted(translation_data),
    )
    return get_translation(session=session, translation_id=translation_id)


def delete_translation(*, session: Session, translation_id: int) -> None:
    """Delete a translation and its tag associations.

    Raises:
        ResourceNotFoundError: If no translation has this ID
    """
    db_translation = get_translation(session=session, translation_id=translation_id)
    with atomic(session) as uow:
        uow.session.delete(db_translation)

    logger.info("translation_deleted", translation_id=translation_id)

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from polyglot.core.base_models import utcnow
from polyglot.core.exceptions import ResourceNotFoundError
from polyglot.core.logging import get_logger
from polyglot.core.uow import atomic
from polyglot.core.validation import raise_for_errors
from polyglot.tags.models import Tag, TagCreate, TagUpdate
from polyglot.tags.validation import validate_tag_create, validate_tag_update

logger = get_logger(__name__)


def get_tags(*, session: Session) -> list[Tag]:
    statement = select(Tag).order_by(Tag.id)
    return list(session.exec(statement).all())


def get_tag(*, session: Session, tag_id: int, with_translations: bool = False) -> Tag:
    """Get a tag by ID.

    Args:
        session: Database session
        tag_id: Tag ID
        with_translations: Eager-load the translations carrying this tag

    Raises:
        ResourceNotFoundError: If no tag has this ID
    """
    statement = select(Tag).where(Tag.id == tag_id)
    if with_translations:
        statement = statement.options(selectinload(Tag.translations))
    tag = session.exec(statement).first()
    if tag is None:
        raise ResourceNotFoundError("Tag", tag_id)
    return tag


def create_tag(*, session: Session, tag_in: TagCreate) -> Tag:
    raise_for_errors(validate_tag_create(session, tag_in))

    db_tag = Tag.model_validate(tag_in)
    with atomic(session) as uow:
        uow.session.add(db_tag)
    session.refresh(db_tag)

    logger.info("tag_created", tag_id=db_tag.id, name=db_tag.name)
    return db_tag


def update_tag(*, session: Session, tag_id: int, tag_in: TagUpdate) -> Tag:
    """Apply the fields present in ``tag_in`` to a tag.

    Raises:
        ResourceNotFoundError: If no tag has this ID
        ValidationError: If the name is null or already taken
    """
    db_tag = get_tag(session=session, tag_id=tag_id)
    raise_for_errors(validate_tag_update(session, tag_id, tag_in))

    tag_data = tag_in.model_dump(exclude_unset=True)
    with atomic(session) as uow:
        db_tag.sqlmodel_update(tag_data)
        db_tag.updated_at = utcnow()
        uow.session.add(db_tag)
    session.refresh(db_tag)

    logger.info("tag_updated", tag_id=db_tag.id, fields=sorted(tag_data))
    return db_tag


def delete_tag(*, session: Session, tag_id: int) -> None:
    """Delete a tag, detaching it from its translations.

    Raises:
        ResourceNotFoundError: If no tag has this ID
    """
    db_tag = get_tag(session=session, tag_id=tag_id)
    with atomic(session) as uow:
        uow.session.delete(db_tag)

    logger.info("tag_deleted", tag_id=tag_id)

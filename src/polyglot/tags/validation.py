from sqlmodel import Session, select

from polyglot.core.validation import FieldError, check_not_null
from polyglot.tags.models import Tag, TagCreate, TagUpdate

NAME_TAKEN = "This tag name is already in use."


def name_in_use(session: Session, name: str, ignore_id: int | None = None) -> bool:
    statement = select(Tag.id).where(Tag.name == name)
    if ignore_id is not None:
        statement = statement.where(Tag.id != ignore_id)
    return session.exec(statement).first() is not None


def validate_tag_create(session: Session, tag_in: TagCreate) -> list[FieldError]:
    if name_in_use(session, tag_in.name):
        return [FieldError("name", NAME_TAKEN)]
    return []


def validate_tag_update(
    session: Session, tag_id: int, tag_in: TagUpdate
) -> list[FieldError]:
    # description is nullable, so an explicit null clears it
    data = tag_in.model_dump(exclude_unset=True)
    errors = check_not_null(data, ("name",))
    name = data.get("name")
    if name is not None and name_in_use(session, name, ignore_id=tag_id):
        errors.append(FieldError("name", NAME_TAKEN))
    return errors

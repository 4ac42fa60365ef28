from sqlmodel import Session, select

from polyglot.core.validation import FieldError, check_not_null
from polyglot.languages.models import Language, LanguageCreate, LanguageUpdate


def code_in_use(session: Session, code: str, ignore_id: int | None = None) -> bool:
    statement = select(Language.id).where(Language.code == code)
    if ignore_id is not None:
        statement = statement.where(Language.id != ignore_id)
    return session.exec(statement).first() is not None


def validate_language_create(
    session: Session, language_in: LanguageCreate
) -> list[FieldError]:
    if code_in_use(session, language_in.code):
        return [FieldError("code", "This language code is already in use.")]
    return []


def validate_language_update(
    session: Session, language_id: int, language_in: LanguageUpdate
) -> list[FieldError]:
    data = language_in.model_dump(exclude_unset=True)
    errors = check_not_null(data, ("code", "name", "is_active"))
    code = data.get("code")
    if code is not None and code_in_use(session, code, ignore_id=language_id):
        errors.append(FieldError("code", "This language code is already in use."))
    return errors

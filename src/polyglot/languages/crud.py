from sqlmodel import Session, select

from polyglot.core.base_models import utcnow
from polyglot.core.exceptions import ResourceNotFoundError
from polyglot.core.logging import get_logger
from polyglot.core.uow import atomic
from polyglot.core.validation import raise_for_errors
from polyglot.languages.models import Language, LanguageCreate, LanguageUpdate
from polyglot.languages.validation import (
    validate_language_create,
    validate_language_update,
)

logger = get_logger(__name__)


def get_languages(*, session: Session) -> list[Language]:
    """Get every language in creation order."""
    statement = select(Language).order_by(Language.id)
    return list(session.exec(statement).all())


def get_language(*, session: Session, language_id: int) -> Language:
    """Get a language by ID.

    Raises:
        ResourceNotFoundError: If no language has this ID
    """
    language = session.get(Language, language_id)
    if language is None:
        raise ResourceNotFoundError("Language", language_id)
    return language


def create_language(*, session: Session, language_in: LanguageCreate) -> Language:
    """Create a new language.

    Args:
        session: Database session
        language_in: Language creation data

    Returns:
        Created language object

    Raises:
        ValidationError: If the code is already taken
    """
    raise_for_errors(validate_language_create(session, language_in))

    db_language = Language.model_validate(language_in)
    with atomic(session) as uow:
        uow.session.add(db_language)
    session.refresh(db_language)

    logger.info("language_created", language_id=db_language.id, code=db_language.code)
    return db_language


def update_language(
    *, session: Session, language_id: int, language_in: LanguageUpdate
) -> Language:
    """Apply the fields present in ``language_in`` to a language.

    Raises:
        ResourceNotFoundError: If no language has this ID
        ValidationError: If a field is null or the new code is taken
    """
    db_language = get_language(session=session, language_id=language_id)
    raise_for_errors(validate_language_update(session, language_id, language_in))

    language_data = language_in.model_dump(exclude_unset=True)
    with atomic(session) as uow:
        db_language.sqlmodel_update(language_data)
        db_language.updated_at = utcnow()
        uow.session.add(db_language)
    session.refresh(db_language)

    logger.info(
        "language_updated",
        language_id=db_language.id,
        fields=sorted(language_data),
    )
    return db_language


def delete_language(*, session: Session, language_id: int) -> None:
    """Delete a language together with all of its translations.

    Raises:
        ResourceNotFoundError: If no language has this ID
    """
    db_language = get_language(session=session, language_id=language_id)
    with atomic(session) as uow:
        uow.session.delete(db_language)

    logger.info("language_deleted", language_id=language_id)

from typing import Annotated, Any

from fastapi import APIRouter, Path, Query, Response, status

from polyglot.auth import CurrentPrincipal, SessionDep
from polyglot.core.base_models import PaginatedResponse
from polyglot.core.validation import raise_for_errors
from polyglot.translations import (
    TranslationCreate,
    TranslationFilters,
    TranslationPublic,
    TranslationUpdate,
    TranslationWithLanguage,
    create_translation,
    delete_translation,
    get_translation,
    get_translations,
    get_translations_by_key,
    update_translation,
)
from polyglot.translations.validation import validate_key_lookup

router = APIRouter(prefix="/translations", tags=["translations"])

TranslationId = Annotated[int, Path(description="Translation ID")]
TranslationsPublic = PaginatedResponse[TranslationPublic]


@router.get("/", response_model=TranslationsPublic)
def read_translations(
    session: SessionDep,
    language: Annotated[str | None, Query(description="Language code")] = None,
    group: Annotated[str | None, Query(description="Exact group name")] = None,
    tag: Annotated[str | None, Query(description="Name of any attached tag")] = None,
    key: Annotated[str | None, Query(description="Substring of the key")] = None,
    per_page: Annotated[int | None, Query(description="Page size, 1 to 100")] = None,
    page: Annotated[int | None, Query(description="1-indexed page")] = None,
) -> Any:
    """List translations, filtered and paginated.

    Filters combine with AND. ``per_page`` outside [1, 100] is clamped.
    """
    filters = TranslationFilters(language=language, group=group, tag=tag, key=key)
    translations, meta = get_translations(
        session=session, filters=filters, page=page, per_page=per_page
    )
    return TranslationsPublic(
        data=[TranslationPublic.model_validate(t) for t in translations],
        meta=meta,
    )


@router.post(
    "/", response_model=TranslationPublic, status_code=status.HTTP_201_CREATED
)
def create_translation_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    translation_in: TranslationCreate,
) -> Any:
    """Create a translation, optionally tagged.

    Every id in ``tags`` must exist or nothing is created.
    """
    translation = create_translation(session=session, translation_in=translation_in)
    return TranslationPublic.model_validate(translation)


# Registered before /{translation_id} so "by-key" is not parsed as an id
@router.get("/by-key", response_model=list[TranslationWithLanguage])
def read_translations_by_key(
    session: SessionDep,
    key: Annotated[str | None, Query(description="Exact translation key")] = None,
    group: Annotated[str | None, Query(description="Exact group name")] = None,
) -> Any:
    """Get a key in every language it has been translated to."""
    raise_for_errors(validate_key_lookup(key))
    assert key is not None  # for type narrowing
    translations = get_translations_by_key(session=session, key=key, group=group)
    return [TranslationWithLanguage.model_validate(t) for t in translations]


@router.get("/{translation_id}", response_model=TranslationPublic)
def read_translation(session: SessionDep, translation_id: TranslationId) -> Any:
    translation = get_translation(session=session, translation_id=translation_id)
    return TranslationPublic.model_validate(translation)


@router.put("/{translation_id}", response_model=TranslationPublic)
def update_translation_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    translation_id: TranslationId,
    translation_in: TranslationUpdate,
) -> Any:
    """Update a translation.

    Fields missing from the body are left alone. A ``tags`` list, even an
    empty one, replaces the translation's tags.
    """
    translation = update_translation(
        session=session, translation_id=translation_id, translation_in=translation_in
    )
    return TranslationPublic.model_validate(translation)


@router.delete("/{translation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_translation_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    translation_id: TranslationId,
) -> Response:
    delete_translation(session=session, translation_id=translation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from typing import Annotated, Any

from fastapi import APIRouter, Path, Response, status

from polyglot.auth import CurrentPrincipal, SessionDep
from polyglot.languages import (
    LanguageCreate,
    LanguageListItem,
    LanguagePublic,
    LanguageUpdate,
    create_language,
    delete_language,
    get_language,
    get_languages,
    update_language,
)

router = APIRouter(prefix="/languages", tags=["languages"])

LanguageId = Annotated[int, Path(description="Language ID")]


@router.get("/", response_model=list[LanguageListItem])
def read_languages(session: SessionDep) -> Any:
    """List languages in creation order."""
    languages = get_languages(session=session)
    return [LanguageListItem.model_validate(language) for language in languages]


@router.post("/", response_model=LanguagePublic, status_code=status.HTTP_201_CREATED)
def create_language_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    language_in: LanguageCreate,
) -> Any:
    """Register a new language."""
    language = create_language(session=session, language_in=language_in)
    return LanguagePublic.model_validate(language)


@router.get("/{language_id}", response_model=LanguagePublic)
def read_language(session: SessionDep, language_id: LanguageId) -> Any:
    language = get_language(session=session, language_id=language_id)
    return LanguagePublic.model_validate(language)


@router.put("/{language_id}", response_model=LanguagePublic)
def update_language_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    language_id: LanguageId,
    language_in: LanguageUpdate,
) -> Any:
    """Update a language.

    Only the fields present in the body are changed.
    """
    language = update_language(
        session=session, language_id=language_id, language_in=language_in
    )
    return LanguagePublic.model_validate(language)


@router.delete("/{language_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_language_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    language_id: LanguageId,
) -> Response:
    """Delete a language and every translation written in it."""
    delete_language(session=session, language_id=language_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from typing import Annotated, Any

from fastapi import APIRouter, Path, Response, status

from polyglot.auth import CurrentPrincipal, SessionDep
from polyglot.tags import (
    TagCreate,
    TagPublic,
    TagUpdate,
    TagWithTranslations,
    create_tag,
    delete_tag,
    get_tag,
    get_tags,
    update_tag,
)

router = APIRouter(prefix="/tags", tags=["tags"])

TagId = Annotated[int, Path(description="Tag ID")]


@router.get("/", response_model=list[TagPublic])
def read_tags(session: SessionDep) -> Any:
    return [TagPublic.model_validate(tag) for tag in get_tags(session=session)]


@router.post("/", response_model=TagPublic, status_code=status.HTTP_201_CREATED)
def create_tag_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    tag_in: TagCreate,
) -> Any:
    tag = create_tag(session=session, tag_in=tag_in)
    return TagPublic.model_validate(tag)


@router.get("/{tag_id}", response_model=TagWithTranslations)
def read_tag(session: SessionDep, tag_id: TagId) -> Any:
    """Get a tag together with the translations carrying it."""
    tag = get_tag(session=session, tag_id=tag_id, with_translations=True)
    return TagWithTranslations.model_validate(tag)


@router.put("/{tag_id}", response_model=TagPublic)
def update_tag_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    tag_id: TagId,
    tag_in: TagUpdate,
) -> Any:
    """Update a tag.

    Only the fields present in the body are changed; an explicit
    ``"description": null`` clears the description.
    """
    tag = update_tag(session=session, tag_id=tag_id, tag_in=tag_in)
    return TagPublic.model_validate(tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag_endpoint(
    session: SessionDep,
    principal: CurrentPrincipal,
    tag_id: TagId,
) -> Response:
    """Delete a tag. Translations carrying it are kept."""
    delete_tag(session=session, tag_id=tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

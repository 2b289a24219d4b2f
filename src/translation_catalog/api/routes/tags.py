from typing import Any

from fastapi import APIRouter, status

from translation_catalog.api.deps import SessionDep
from translation_catalog.core.base_models import Message
from translation_catalog.tags import TagCreate, TagPublic, create_tag, delete_tag, get_tags

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=list[TagPublic])
def read_tags(session: SessionDep) -> Any:
    return get_tags(session=session)


@router.post("/", response_model=TagPublic, status_code=status.HTTP_201_CREATED)
def create_tag_endpoint(session: SessionDep, tag_in: TagCreate) -> Any:
    return create_tag(session=session, tag_in=tag_in)


@router.delete("/{tag_id}", response_model=Message)
def delete_tag_endpoint(session: SessionDep, tag_id: int) -> Any:
    """Delete a tag. Translations that carried it keep their other tags."""
    delete_tag(session=session, tag_id=tag_id)
    return Message(message="Tag deleted successfully")
